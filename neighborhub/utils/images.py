from rest_framework import serializers

MAX_IMAGES = 5


class ImageRefSerializer(serializers.Serializer):
    """Reference to an image already uploaded to the media host."""

    url = serializers.URLField(max_length=500)
    public_id = serializers.CharField(max_length=255, required=False, allow_blank=True)
    caption = serializers.CharField(max_length=200, required=False, allow_blank=True)


def image_list_field(**kwargs) -> serializers.ListField:
    kwargs.setdefault("required", False)
    return serializers.ListField(
        child=ImageRefSerializer(),
        max_length=MAX_IMAGES,
        **kwargs,
    )
