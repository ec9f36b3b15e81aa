from __future__ import annotations
from collections.abc import Iterator
from dataclasses import dataclass, field

PROVENANCE_TAG = 'deepl-autofill'
NEEDS_REVIEW_STATE = 'needs-review-translation'

@dataclass
class CatalogNote:
    content : str
    origin : str|None = None

@dataclass
class EntryMetadata:
    """
    Format-specific information attached to a catalog entry: the original entry
    identifier, attributes of the translated text and any annotation notes.
    """
    id : str|None = None
    target_attributes : dict[str,str] = field(default_factory=dict)
    notes : list[CatalogNote] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.id is None and not self.target_attributes and not self.notes

@dataclass(frozen=True)
class AutoTranslationMarker:
    """
    Annotation recording that an entry was machine translated and needs review
    """
    source_locale : str|None
    target_locale : str
    provider : str = 'DeepL'

    @property
    def note(self) -> str:
        if self.source_locale:
            return f"Auto-translated by {self.provider} ({self.source_locale} → {self.target_locale})"
        return f"Auto-translated by {self.provider}"

    def Apply(self, metadata : EntryMetadata) -> EntryMetadata:
        """
        Mark the entry for review, keeping other attributes and notes.
        Notes from a previous run are replaced rather than accumulated.
        """
        metadata.target_attributes['state'] = NEEDS_REVIEW_STATE
        metadata.notes = [ note for note in metadata.notes if note.origin != PROVENANCE_TAG ]
        metadata.notes.append(CatalogNote(self.note, PROVENANCE_TAG))
        return metadata

class Catalog:
    """
    The messages of one locale and domain: an ordered mapping of key to text,
    with optional metadata for each key.
    """
    def __init__(self, locale : str, domain : str = 'messages'):
        self.locale : str = locale
        self.domain : str = domain
        self.entries : dict[str,str] = {}
        self.metadata : dict[str,EntryMetadata] = {}

    @property
    def keys(self) -> list[str]:
        return list(self.entries.keys())

    def Has(self, key : str) -> bool:
        return key in self.entries

    def Get(self, key : str, default : str|None = None) -> str|None:
        return self.entries.get(key, default)

    def Set(self, key : str, text : str|None):
        self.entries[key] = text if text is not None else ''

    def IsTranslated(self, key : str) -> bool:
        """ True if the key exists with a non-empty value """
        return bool(self.entries.get(key))

    def GetMetadata(self, key : str) -> EntryMetadata|None:
        return self.metadata.get(key)

    def SetMetadata(self, key : str, metadata : EntryMetadata):
        self.metadata[key] = metadata

    def GetOrCreateMetadata(self, key : str) -> EntryMetadata:
        metadata = self.metadata.get(key)
        if metadata is None:
            metadata = EntryMetadata()
            self.metadata[key] = metadata
        return metadata

    def items(self) -> Iterator[tuple[str,str]]:
        return iter(self.entries.items())

    def __contains__(self, key : object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Catalog({self.locale}, {self.domain}, {len(self.entries)} entries)"
