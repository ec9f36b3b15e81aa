from PyAutofill.Catalog import AutoTranslationMarker, Catalog

# Source texts that are never sent for translation (after trimming)
untranslatable_texts = ('', '0')

class CatalogMerger:
    """
    Aligns a target catalog with its source and merges translations into it
    """
    def __init__(self, provider_name : str = 'DeepL'):
        self.provider_name = provider_name

    def PrepareTarget(self, source : Catalog, target : Catalog) -> Catalog:
        """
        Add every source key the target lacks (with an empty value) and carry over
        the source entry id where the target has none, so ids stay stable across locales.
        """
        for key in source.keys:
            if not target.Has(key):
                target.Set(key, '')

            source_metadata = source.GetMetadata(key)
            if source_metadata and source_metadata.id is not None:
                target_metadata = target.GetOrCreateMetadata(key)
                if target_metadata.id is None:
                    target_metadata.id = source_metadata.id

        return target

    def CollectTexts(self, source : Catalog, missing_keys : list[str]) -> dict[str,str]:
        """
        Source texts for the missing keys, skipping those with nothing to translate
        """
        texts : dict[str,str] = {}
        for key in missing_keys:
            text = source.Get(key) or ''
            if text.strip() not in untranslatable_texts:
                texts[key] = text

        return texts

    def ApplyTranslations(self, target : Catalog, translations : dict[str,str], mark_auto_translated : bool, source_locale : str|None) -> Catalog:
        """
        Write translations into the target. When marking, only the translated entries are flagged for review.
        """
        marker = AutoTranslationMarker(source_locale, target.locale, self.provider_name)

        for key, translation in translations.items():
            target.Set(key, translation)

            if mark_auto_translated:
                marker.Apply(target.GetOrCreateMetadata(key))

        return target
