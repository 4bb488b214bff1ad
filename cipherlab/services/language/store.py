import logging
from functools import lru_cache
from pathlib import Path

from cipherlab.core.config import get_settings
from cipherlab.core.exceptions import LanguageFileNotFoundError, LanguageNotFoundError
from cipherlab.services.language.model import LanguageModel
from cipherlab.services.language.storage import LANGUAGE_SUFFIX, language_path, load_language, save_language
from cipherlab.services.language.training import BUNDLED_LANGUAGES, train_bundled

logger = logging.getLogger(__name__)


class LanguageStore:
    """
    Trained languages kept on disk and cached in memory.

    A bundled language that has never been trained is trained on first
    use and written to the store directory.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self._cache: dict[str, LanguageModel] = {}

    def get(self, name: str) -> LanguageModel:
        if name in self._cache:
            return self._cache[name]

        try:
            model = load_language(language_path(self.directory, name))
        except LanguageFileNotFoundError:
            if name not in BUNDLED_LANGUAGES:
                raise LanguageNotFoundError(name) from None
            logger.info("No trained file for bundled language '%s', training it", name)
            model = train_bundled(name)
            save_language(model, language_path(self.directory, name))

        self._cache[name] = model
        return model

    def add(self, model: LanguageModel) -> Path:
        """Cache a trained model and write it to the store directory."""
        self._cache[model.name] = model
        return save_language(model, language_path(self.directory, model.name))

    def available(self) -> list[str]:
        names = set(self._cache) | set(BUNDLED_LANGUAGES)
        if self.directory.is_dir():
            names.update(path.stem for path in self.directory.glob(f"*{LANGUAGE_SUFFIX}"))
        return sorted(names)


@lru_cache
def get_language_store() -> LanguageStore:
    """Get cached language store instance."""
    return LanguageStore(get_settings().language_dir)
