"""Order id generation and display formatting."""

import random
import string
import time

BASE36_ALPHABET = string.digits + string.ascii_uppercase
RANDOM_SUFFIX_LENGTH = 5
DISPLAY_ID_LENGTH = 6


def to_base36(number):
    if number == 0:
        return '0'
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits))


def generate_order_id(now=None):
    """Millisecond timestamp in base 36 followed by 5 random base-36 characters."""
    if now is None:
        now = time.time()
    timestamp = to_base36(int(now * 1000))
    suffix = ''.join(random.choices(BASE36_ALPHABET, k=RANDOM_SUFFIX_LENGTH))
    return (timestamp + suffix).upper()


def format_order_id(order_id, brand='SUN'):
    """Short id shown to customers, e.g. ``SUN-LQ2X9A``."""
    short = (order_id or '')[:DISPLAY_ID_LENGTH].upper() or '0' * DISPLAY_ID_LENGTH
    return f'{brand}-{short}'
