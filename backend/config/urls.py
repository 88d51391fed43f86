from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.api import LoginView, MeView
from bookings.api import BookingViewSet, SendBookingEmailView
from catalog.api import (
    CatalogView,
    LocationImageUploadView,
    LocationViewSet,
    TourTypeViewSet,
)

router = DefaultRouter()
router.register(r"tour-types", TourTypeViewSet, basename="tour-type")
router.register(r"locations", LocationViewSet, basename="location")
router.register(r"bookings", BookingViewSet, basename="booking")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/login/", LoginView.as_view(), name="auth-login"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="auth-refresh"),
    path("api/auth/me/", MeView.as_view(), name="auth-me"),
    path("api/catalog/", CatalogView.as_view(), name="catalog"),
    path(
        "api/uploads/location-image/",
        LocationImageUploadView.as_view(),
        name="location-image-upload",
    ),
    path("api/send-booking/", SendBookingEmailView.as_view(), name="send-booking"),
    path("api/", include(router.urls)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
