"""
URL configuration for the Tagad Platforms contact backend.
"""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path, re_path

from apps.core import views as core_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("apps.core.urls")),
]

if settings.DEBUG and "debug_toolbar" in settings.INSTALLED_APPS:
    import debug_toolbar

    urlpatterns = [
        path("__debug__/", include(debug_toolbar.urls)),
        *urlpatterns,
    ]

# Must stay last: every unmatched path gets the JSON 404.
urlpatterns.append(re_path(r"^.*$", core_views.not_found, name="not_found"))

handler404 = "apps.core.views.not_found"
handler500 = "apps.core.views.server_error"
