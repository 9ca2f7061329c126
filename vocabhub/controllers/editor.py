"""
Vocabulary Editor: Add.

Validate the form, upload the audio file, then insert the record.
The upload always precedes the insert; if the insert fails the uploaded
object is removed again.
"""

import logging
from typing import List, Optional, Set

from ..errors import (
    AssetError,
    BackendError,
    StorageConfigurationError,
    ValidationError,
    VocabHubError,
)
from ..models import AudioUpload, Notice, VocabularyEntry
from ..services import MediaService, VocabularyService
from ..utils.parsing import TextParser

logger = logging.getLogger(__name__)


class VocabularyEditor:
    """
    Form state and submit flow for adding an entry.

    Usage:
        editor = VocabularyEditor(vocabulary, media)
        await editor.load_categories()
        editor.select_audio(AudioUpload("cat.mp3", data))
        entry = await editor.submit("cat", "a small feline", "animals")
    """

    def __init__(self, vocabulary: VocabularyService, media: MediaService) -> None:
        self.vocabulary = vocabulary
        self.media = media

        self.categories: List[str] = []
        self._fetched_categories: List[str] = []
        self._local_categories: Set[str] = set()
        self.category = ""
        self.audio: Optional[AudioUpload] = None
        self.uploaded_url: Optional[str] = None
        self.submitting = False
        self.notice: Optional[Notice] = None

    async def load_categories(self) -> None:
        """
        Fetch the derived categories for the picker.

        The list is replaced on every fetch. Only labels added with
        add_category() that no stored entry uses yet are kept on top.
        """
        try:
            self._fetched_categories = await self.vocabulary.fetch_categories()
        except VocabHubError as exc:
            logger.error("Failed to load categories: %s", exc)
            self.notice = Notice.error(f"Could not load categories: {exc}")
            return
        self._local_categories -= set(self._fetched_categories)
        self.categories = sorted(set(self._fetched_categories) | self._local_categories)

    def add_category(self, label: str) -> bool:
        """
        Add a new category locally and select it.

        Returns:
            False if the label is blank
        """
        label = TextParser.clean_field(label)
        if not label:
            self.notice = Notice.warning("Please enter a category name.")
            return False
        if label not in self._fetched_categories:
            self._local_categories.add(label)
        self.categories = sorted(set(self.categories) | {label})
        self.category = label
        self.notice = None
        return True

    def select_audio(self, upload: Optional[AudioUpload]) -> bool:
        """
        Pick the audio file. A rejected file is not kept.

        Returns:
            True if the file was accepted
        """
        try:
            self.audio = self.media.validate(upload)
        except AssetError as exc:
            self.audio = None
            self.notice = Notice.error(exc.message)
            return False
        self.notice = None
        return True

    def clear(self) -> None:
        """Reset the form, the picked file and the notice."""
        self.category = ""
        self.audio = None
        self.notice = None

    def _validate(self, word: str, meaning: str, category: str) -> AudioUpload:
        if not (word and meaning and category):
            raise ValidationError("Please fill in word, meaning and category.")
        return self.media.validate(self.audio)

    async def submit(self, word: str, meaning: str, category: Optional[str] = None) -> Optional[VocabularyEntry]:
        """
        Validate, upload, insert.

        Args:
            word: Word text
            meaning: Meaning text
            category: Category label (defaults to the selected one)

        Returns:
            The stored entry, or None if any step failed (see ``notice``)
        """
        if self.submitting:
            return None

        word = TextParser.clean_field(word)
        meaning = TextParser.clean_field(meaning)
        category = TextParser.clean_field(category if category is not None else self.category)

        try:
            upload = self._validate(word, meaning, category)
        except VocabHubError as exc:
            self.notice = Notice.error(exc.message)
            return None

        self.submitting = True
        self.notice = None
        try:
            return await self._store(word, meaning, category, upload)
        finally:
            self.submitting = False

    async def _store(self, word: str, meaning: str, category: str, upload: AudioUpload) -> Optional[VocabularyEntry]:
        try:
            asset = await self.media.upload_audio(upload)
        except StorageConfigurationError as exc:
            logger.error("Storage is not configured: %s", exc)
            self.notice = Notice.error(exc.message)
            return None
        except VocabHubError as exc:
            logger.error("Audio upload failed: %s", exc)
            self.notice = Notice.error(f"Audio upload failed: {exc.message}")
            return None

        self.uploaded_url = asset.public_url

        try:
            entry = await self.vocabulary.create_entry(word, meaning, category, asset.public_url)
        except VocabHubError as exc:
            detail = exc.describe() if isinstance(exc, BackendError) else exc.message
            logger.error("Insert failed, removing uploaded audio: %s", detail)
            await self.media.discard(asset)
            self.uploaded_url = None
            self.notice = Notice.error(f"Could not save the word: {detail}")
            return None

        is_new_category = category not in self._fetched_categories
        self.clear()
        self.notice = Notice.success(f"Added '{entry.word}' to category '{entry.category}'.")
        self._local_categories.discard(entry.category)
        if is_new_category:
            self.categories = sorted(set(self.categories) | {entry.category})
            await self.load_categories()
        return entry
