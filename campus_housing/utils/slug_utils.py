"""
Username generation utilities.
"""

import random
import re
import string
import unicodedata
from typing import Callable

# Letters with no NFKD decomposition
TRANSLITERATIONS = str.maketrans({
    'Đ': 'Dj',
    'đ': 'dj',
    'Ø': 'O',
    'ø': 'o',
    'Ł': 'L',
    'ł': 'l',
    'ß': 'ss',
})


class SlugHelper:
    """Slug helpers for student usernames"""

    @staticmethod
    def create_slug(text: str, max_length: int = 50, separator: str = '') -> str:
        """Create a lowercase ASCII slug from text"""
        if not text:
            return ''

        # Normalize Unicode characters and drop what has no ASCII form
        text = text.translate(TRANSLITERATIONS)
        text = unicodedata.normalize('NFKD', text)
        text = text.encode('ascii', 'ignore').decode('ascii').lower()

        text = re.sub(r'[^a-z0-9\s_-]', '', text)
        text = re.sub(r'[\s_-]+', separator, text).strip(separator or None)

        return text[:max_length]

    @classmethod
    def generate_student_username(cls, first_name: str, last_name: str,
                                  max_length: int = 64) -> str:
        """Base username from a student's names, e.g. ``nikola.petrovic``"""
        parts = [cls.create_slug(first_name), cls.create_slug(last_name)]
        base = '.'.join(part for part in parts if part)
        return base[:max_length] or 'student'


class UniqueUsernameGenerator:
    """Generate usernames that are not taken yet"""

    def __init__(self, exists: Callable[[str], bool], max_attempts: int = 100):
        """
        Args:
            exists: Returns True when a username is already taken
            max_attempts: Numeric suffixes tried before falling back to random
        """
        self.exists = exists
        self.max_attempts = max_attempts

    def generate(self, first_name: str, last_name: str, max_length: int = 64) -> str:
        base = SlugHelper.generate_student_username(first_name, last_name, max_length)
        if not self.exists(base):
            return base

        for counter in range(1, self.max_attempts + 1):
            suffix = str(counter)
            candidate = f"{base[:max_length - len(suffix)]}{suffix}"
            if not self.exists(candidate):
                return candidate

        # Fallback: random suffix
        return self._random_candidate(base, max_length)

    @staticmethod
    def _random_candidate(base: str, max_length: int, length: int = 6) -> str:
        random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))
        return f"{base[:max_length - length - 1]}-{random_suffix}"
