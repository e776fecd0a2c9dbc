import logging
from typing import Dict
from guidebot.services.db_service import db_service
from guidebot.config import strings as default_strings
from guidebot.workflows.interpolator import DEFAULT_LABELS

logger = logging.getLogger(__name__)

class StringService:
    def __init__(self):
        self._strings_cache: Dict[str, str] = {}
        logger.info("StringService initialized.")

    async def load_strings(self):
        """Loads string overrides from the database into the in-memory cache."""
        logger.info("Loading strings from database into cache...")
        try:
            db_strings = await db_service.get_all_strings()
            self._strings_cache = {s['key']: s['value'] for s in db_strings if s.get('key') and isinstance(s.get('value'), str)}
            logger.info(f"Successfully loaded {len(self._strings_cache)} strings into cache.")
        except Exception as e:
            logger.error(f"Failed to load strings from database: {e}", exc_info=True)
            self._load_defaults()

    def get_string(self, key: str, default: str = "") -> str:
        """Gets a string from the cache, then from config/strings.py, then the given default."""
        if key in self._strings_cache:
            return self._strings_cache[key]
        return getattr(default_strings, key, default) if key.isupper() else default

    def labels(self) -> Dict[str, str]:
        """Fallback words handed to the interpolator (price, schedule, destination)."""
        return {key: self.get_string(key, value) for key, value in DEFAULT_LABELS.items()}

    def _load_defaults(self):
        """Loads default strings from the strings.py file as a fallback."""
        logger.warning("Falling back to default strings from config file.")
        for key in dir(default_strings):
            if key.isupper():
                self._strings_cache[key] = getattr(default_strings, key)

# Globally accessible instance
string_service = StringService()
