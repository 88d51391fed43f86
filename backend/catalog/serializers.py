from rest_framework import serializers

from .images import public_image_url
from .models import Location, TourType
from .normalization import normalize_location
from .pricing import DURATIONS, FULL_DAY, parse_price


def _fill_bilingual(attrs, instance, prefix, *, required_message=None):
    """Copy the Thai or English text into its empty counterpart."""
    th_key, en_key = f"{prefix}_th", f"{prefix}_en"
    th = attrs.get(th_key, getattr(instance, th_key, "") if instance else "") or ""
    en = attrs.get(en_key, getattr(instance, en_key, "") if instance else "") or ""
    th, en = th.strip(), en.strip()
    if required_message and not (th or en):
        raise serializers.ValidationError({en_key: required_message})
    attrs[th_key] = th or en
    attrs[en_key] = en or th
    return attrs


def _unique(values):
    return list(dict.fromkeys(value for value in values if value))


def build_price_payload(prices, required_durations):
    """
    Keep the parseable prices and require one for every duration the location offers.
    """
    prices = prices or {}
    payload = {}
    for duration in DURATIONS:
        price = parse_price(prices.get(duration))
        if price is not None:
            payload[duration] = price

    for duration in required_durations:
        if duration not in payload:
            label = "Full day" if duration == FULL_DAY else "Half day"
            raise serializers.ValidationError(
                {"price_per_person": f"Please provide a valid {label} price."}
            )
    return payload


class HighlightsField(serializers.Field):
    default_error_messages = {
        "invalid": "Highlights must be a list or a comma-separated string.",
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            items = data.split(",")
        elif isinstance(data, (list, tuple)):
            items = data
        else:
            self.fail("invalid")
        return [str(item).strip() for item in items if str(item).strip()]

    def to_representation(self, value):
        return list(value or [])


class TourTypeSerializer(serializers.ModelSerializer):
    id = serializers.SlugField(max_length=64, required=False)

    class Meta:
        model = TourType
        fields = [
            "id",
            "label_th",
            "label_en",
            "description_th",
            "description_en",
        ]

    def validate_id(self, value):
        if self.instance is not None:
            if value != self.instance.pk:
                raise serializers.ValidationError("Tour type ids cannot be changed.")
        elif TourType.objects.filter(pk=value).exists():
            raise serializers.ValidationError("A tour type with this id already exists.")
        return value

    def validate(self, attrs):
        _fill_bilingual(attrs, self.instance, "label", required_message="Please provide a tour type name.")
        _fill_bilingual(attrs, self.instance, "description")
        return attrs


class LocationSerializer(serializers.ModelSerializer):
    """
    Accepts raw admin edits and stores them unnormalized. Output is the normalized
    record plus a resolved ``image_url``; pass ``tour_type_ids`` (and optionally
    ``storage``) in the serializer context.
    """

    id = serializers.SlugField(max_length=64, required=False)
    highlights = HighlightsField(required=False)
    tour_type_ids = serializers.ListField(
        child=serializers.CharField(max_length=64), required=False
    )
    available_durations = serializers.ListField(
        child=serializers.ChoiceField(choices=DURATIONS), required=False
    )
    price_per_person = serializers.DictField(required=False, allow_null=True)

    class Meta:
        model = Location
        fields = [
            "id",
            "name_th",
            "name_en",
            "area_th",
            "area_en",
            "description_th",
            "description_en",
            "image_path",
            "highlights",
            "tour_type_ids",
            "available_durations",
            "price_per_person",
        ]

    def validate_id(self, value):
        if self.instance is not None:
            if value != self.instance.pk:
                raise serializers.ValidationError("Location ids cannot be changed.")
        elif Location.objects.filter(pk=value).exists():
            raise serializers.ValidationError("A location with this id already exists.")
        return value

    def validate(self, attrs):
        instance = self.instance
        _fill_bilingual(attrs, instance, "name", required_message="Please provide a location name.")
        _fill_bilingual(attrs, instance, "area")
        _fill_bilingual(attrs, instance, "description")

        if "tour_type_ids" in attrs:
            attrs["tour_type_ids"] = _unique(attrs["tour_type_ids"])
        if "available_durations" in attrs:
            attrs["available_durations"] = _unique(attrs["available_durations"])

        durations = attrs.get(
            "available_durations",
            instance.available_durations if instance else [],
        )
        required = durations or list(DURATIONS)
        if "price_per_person" in attrs or instance is None:
            attrs["price_per_person"] = build_price_payload(attrs.get("price_per_person"), required)
        elif "available_durations" in attrs:
            build_price_payload(instance.price_per_person, required)
        return attrs

    def to_representation(self, instance):
        location = normalize_location(instance.as_record(), self.context.get("tour_type_ids", []))
        location["image_url"] = public_image_url(location["image_path"], self.context.get("storage"))
        return location


class LocationPriceSerializer(serializers.Serializer):
    price_per_person = serializers.DictField()

    def validate(self, attrs):
        location = self.context["location"]
        required = location.available_durations or list(DURATIONS)
        attrs["price_per_person"] = build_price_payload(attrs["price_per_person"], required)
        return attrs

