import re
from datetime import datetime, time

from rest_framework import serializers

SHIFT_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$')


class ShiftTimeField(serializers.Field):
    """Time of day given as HH:mm or HH:mm:ss, rendered as HH:mm:ss"""
    default_error_messages = {
        'invalid': 'Time must be in HH:mm or HH:mm:ss format',
    }

    def to_internal_value(self, data):
        if isinstance(data, time):
            return data
        if not isinstance(data, str) or not SHIFT_TIME_PATTERN.match(data):
            self.fail('invalid')
        fmt = '%H:%M:%S' if data.count(':') == 2 else '%H:%M'
        return datetime.strptime(data, fmt).time()

    def to_representation(self, value):
        return value.strftime('%H:%M:%S') if value else None
