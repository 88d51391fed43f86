import logging

from django.core.files.storage import default_storage
from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.validation import PARTY_SIZE_MAX, PARTY_SIZE_MIN

from .images import ImageUploadError, public_image_url, store_location_image
from .models import Location, TourType
from .permissions import IsStaffOrReadOnly
from .pricing import ADDON_KEYS, ADDON_LABELS, ADDON_PRICES, BASE_PRICE, PER_PERSON_ADDONS
from .serializers import LocationPriceSerializer, LocationSerializer, TourTypeSerializer
from .services import known_tour_type_ids, load_catalog

logger = logging.getLogger(__name__)


class CatalogView(APIView):
    """Everything the booking form needs to render its choices."""

    permission_classes = [AllowAny]
    storage = default_storage

    def get(self, request, *args, **kwargs):
        catalog = load_catalog()
        locations = [
            {**location, "image_url": public_image_url(location["image_path"], self.storage)}
            for location in catalog.locations
        ]
        addons = [
            {
                "key": key,
                "label_th": ADDON_LABELS[key]["th"],
                "label_en": ADDON_LABELS[key]["en"],
                "unit_price": ADDON_PRICES[key],
                "per_person": key in PER_PERSON_ADDONS,
            }
            for key in ADDON_KEYS
        ]
        return Response(
            {
                "tour_types": catalog.tour_types,
                "locations": locations,
                "addons": addons,
                "base_prices": BASE_PRICE,
                "party_size": {"min": PARTY_SIZE_MIN, "max": PARTY_SIZE_MAX},
                "currency": "THB",
                "from_defaults": catalog.from_defaults,
            }
        )


class TourTypeViewSet(viewsets.ModelViewSet):
    serializer_class = TourTypeSerializer
    permission_classes = [IsStaffOrReadOnly]
    queryset = TourType.objects.all()
    search_fields = ["label_en", "label_th"]

    def perform_create(self, serializer):
        tour_type = serializer.save()
        logger.info("Tour type %s created", tour_type.pk)

    def perform_destroy(self, instance):
        # Locations and bookings keep their references; they are tolerated as dangling.
        logger.info("Tour type %s deleted", instance.pk)
        instance.delete()


class LocationViewSet(viewsets.ModelViewSet):
    serializer_class = LocationSerializer
    permission_classes = [IsStaffOrReadOnly]
    queryset = Location.objects.all()
    search_fields = ["name_en", "name_th", "area_en", "area_th"]
    storage = default_storage

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["tour_type_ids"] = known_tour_type_ids()
        context["storage"] = self.storage
        return context

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        locations = self.get_serializer(queryset, many=True).data

        tour_type = request.query_params.get("tour_type")
        duration = request.query_params.get("duration")
        if tour_type:
            locations = [item for item in locations if tour_type in item["tour_type_ids"]]
        if duration:
            locations = [item for item in locations if duration in item["available_durations"]]
        return Response(locations)

    def perform_create(self, serializer):
        location = serializer.save()
        logger.info("Location %s created", location.pk)

    def perform_destroy(self, instance):
        logger.info("Location %s deleted", instance.pk)
        instance.delete()

    @action(detail=True, methods=["patch"], url_path="prices")
    def prices(self, request, pk=None):
        location = self.get_object()
        serializer = LocationPriceSerializer(data=request.data, context={"location": location})
        serializer.is_valid(raise_exception=True)

        location.price_per_person = serializer.validated_data["price_per_person"]
        location.save(update_fields=["price_per_person", "updated_at"])
        logger.info("Location %s prices updated: %s", location.pk, location.price_per_person)
        return Response(self.get_serializer(location).data)


class LocationImageUploadView(APIView):
    """Upload a location image; optionally attach it to an existing location."""

    parser_classes = [MultiPartParser, FormParser]
    permission_classes = [IsAdminUser]
    storage = default_storage

    def post(self, request, *args, **kwargs):
        image = request.FILES.get("image")
        if image is None:
            return Response({"detail": "image file is required."}, status=status.HTTP_400_BAD_REQUEST)

        location = None
        location_id = request.data.get("location_id")
        if location_id:
            location = get_object_or_404(Location, pk=location_id)

        name = request.data.get("name") or (location.name_en if location else "")
        try:
            image_path = store_location_image(image, name=name, storage=self.storage)
        except ImageUploadError as exc:
            logger.warning("Rejected location image upload: %s", exc)
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        if location is not None:
            location.image_path = image_path
            location.save(update_fields=["image_path", "updated_at"])

        return Response(
            {
                "image_path": image_path,
                "image_url": public_image_url(image_path, self.storage),
                "location_id": location.pk if location else None,
            },
            status=status.HTTP_201_CREATED,
        )
