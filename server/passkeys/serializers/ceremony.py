"""DRF serializers validating ceremony requests."""

from rest_framework import serializers


class UserNameSerializer(serializers.Serializer):
    """Query string of the options endpoints"""

    userName = serializers.CharField(max_length=150)


class CeremonyResultSerializer(UserNameSerializer):
    """Body of the result endpoints: the user name and the client's credential response"""

    body = serializers.DictField()
