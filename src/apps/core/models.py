"""Core app models."""

from typing import ClassVar

from django.db import models

SERVICE_CHOICES = [
    ("E-Commerce Development", "E-Commerce Development"),
    ("Mobile App Development", "Mobile App Development"),
    ("Business Websites", "Business Websites"),
    ("Digital Marketing", "Digital Marketing"),
    ("ERP Solutions", "ERP Solutions"),
    ("Project Management Software", "Project Management Software"),
    ("Email Marketing", "Email Marketing"),
    ("Salesforce Integration", "Salesforce Integration"),
    ("Other", "Other"),
]

SERVICE_NAMES = tuple(value for value, _ in SERVICE_CHOICES)


class ContactSubmission(models.Model):
    """Stores contact form submissions. Rows are append-only."""

    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254)
    company = models.CharField(max_length=100, blank=True, default="")
    service = models.CharField(
        max_length=100,
        blank=True,
        default="",
        choices=SERVICE_CHOICES,
    )
    message = models.TextField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=512, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-created_at", "-id"]
        verbose_name = "contact submission"
        verbose_name_plural = "contact submissions"

    def __str__(self) -> str:
        return f"{self.name} - {self.email} ({self.created_at:%Y-%m-%d})"

    def to_dict(self) -> dict:
        """Return the JSON representation used by the API."""
        return {
            "id": self.pk,
            "name": self.name,
            "email": self.email,
            "company": self.company,
            "service": self.service,
            "message": self.message,
            "ipAddress": self.ip_address or "",
            "userAgent": self.user_agent,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
