"""Core app URL configuration."""

from django.urls import re_path

from . import views

app_name = "core"

# Trailing slashes are optional so the front end can call either form.
urlpatterns = [
    re_path(r"^$", views.RootView.as_view(), name="root"),
    re_path(r"^api/?$", views.APIIndexView.as_view(), name="api_index"),
    re_path(r"^api/health/?$", views.HealthView.as_view(), name="health"),
    re_path(r"^api/contact/submit/?$", views.ContactSubmitView.as_view(), name="contact_submit"),
    re_path(r"^api/contact/?$", views.ContactListView.as_view(), name="contact_list"),
]
