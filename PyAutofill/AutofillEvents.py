from events import Events

class AutofillEvents(Events):
    """
    Progress notifications. Subscribe with `events.batch_translated += handler`.

    batch_translated(target_locale, batch_number, batch_count, translated_count)
    locale_started(target_locale, key_count)
    locale_completed(target_locale, translated_count, target_path)
    """
    __events__ = ('batch_translated', 'locale_started', 'locale_completed')
