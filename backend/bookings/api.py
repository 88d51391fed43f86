import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from catalog.services import load_catalog

from .models import Booking
from .serializers import (
    BookingCreateSerializer,
    BookingEmailRequestSerializer,
    BookingSendEmailSerializer,
    BookingSerializer,
    QuoteRequestSerializer,
)
from .services.emails import BookingEmailError, booking_summary_for, send_booking_email

logger = logging.getLogger(__name__)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Public booking submission and quotes; staff-only listing and e-mail.
    """

    queryset = Booking.objects.all()
    serializer_class = BookingSerializer
    permission_classes = [IsAdminUser]
    filterset_fields = ["date", "duration", "tour_type", "location_id"]
    search_fields = ["contact_name", "contact_email"]
    ordering_fields = ["created_at", "date", "party_size"]
    public_actions = ("create", "quote")

    def get_permissions(self):
        if self.action in self.public_actions:
            return [AllowAny()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "quote":
            return QuoteRequestSerializer
        if self.action == "send_email":
            return BookingSendEmailSerializer
        return BookingSerializer

    def get_catalog(self):
        if not hasattr(self, "_catalog"):
            self._catalog = load_catalog()
        return self._catalog

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["catalog"] = self.get_catalog()
        return context

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()
        logger.info(
            "Booking %s created for %s on %s (total %s)",
            booking.pk,
            booking.location_id,
            booking.date,
            booking.price_total,
        )

        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        data["price_breakdown"] = serializer.quote.as_dict()
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def quote(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(serializer.get_quote().as_dict())

    @action(detail=True, methods=["post"], url_path="send-email")
    def send_email(self, request, pk=None):
        booking = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        to = serializer.validated_data.get("to", booking.contact_email)
        locale = serializer.validated_data.get("locale", booking.locale)
        summary = booking_summary_for(booking, self.get_catalog())
        try:
            send_booking_email(to=to, booking=summary, locale=locale)
        except BookingEmailError as exc:
            logger.exception("Failed to e-mail booking %s", booking.pk)
            return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True, "to": to})


class SendBookingEmailView(APIView):
    """E-mail a booking summary assembled by the admin client."""

    permission_classes = [IsAdminUser]

    def post(self, request, *args, **kwargs):
        serializer = BookingEmailRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        try:
            send_booking_email(to=data["to"], booking=data["booking"], locale=data["locale"])
        except BookingEmailError as exc:
            logger.exception("Failed to e-mail booking summary to %s", data["to"])
            return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"ok": True})
