from typing import Any

from lxml import etree

from PyAutofill.Catalog import Catalog, CatalogNote
from PyAutofill.CatalogFileHandler import CatalogFileHandler
from PyAutofill.AutofillError import CatalogParseError
from PyAutofill.Helpers.Localization import _

XLIFF_NAMESPACE = 'urn:oasis:names:tc:xliff:document:1.2'

def _tag(name : str) -> str:
    return f"{{{XLIFF_NAMESPACE}}}{name}"

def _text(element) -> str:
    return ''.join(element.itertext()) if element is not None else ''

def _children(element, name : str) -> list:
    """ Child elements with the local name, in any or no namespace """
    return [ child for child in element if isinstance(child.tag, str) and etree.QName(child).localname == name ]

def _child(element, name : str):
    children = _children(element, name)
    return children[0] if children else None

class XliffFileHandler(CatalogFileHandler):
    """
    File handler for XLIFF catalogs. Both XLIFF 1.2 and 2.x are read, XLIFF 1.2 is written.

    Messages are keyed by the trans-unit `resname` (the unit `name` in 2.x),
    or by the source text when there is none. The value is the target text, or
    the source text for units without a target element. The original unit id,
    the attributes of the target element and any notes are kept as entry
    metadata so that they survive a load/dump cycle.
    """

    def parse_string(self, content : str, locale : str, domain : str = 'messages') -> Catalog:
        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
            root = etree.fromstring(content.encode('utf-8'), parser=parser)

        except etree.XMLSyntaxError as e:
            raise CatalogParseError(_("Failed to parse XLIFF: {}").format(str(e)), e)

        if etree.QName(root).localname != 'xliff':
            raise CatalogParseError(_("Not an XLIFF document: root element is <{}>").format(etree.QName(root).localname))

        version = root.get('version') or '1.2'
        if version.startswith('1.'):
            return self._parse_version1(root, Catalog(locale, domain))

        if version.startswith('2.'):
            return self._parse_version2(root, Catalog(locale, domain))

        raise CatalogParseError(_("Unsupported XLIFF version: {}").format(version))

    def _parse_version1(self, root, catalog : Catalog) -> Catalog:
        for unit in root.iter('{*}trans-unit'):
            source = _child(unit, 'source')
            target = _child(unit, 'target')

            key = unit.get('resname') or _text(source)
            if not key:
                continue

            notes = [ CatalogNote(_text(note), note.get('from')) for note in _children(unit, 'note') ]
            self._add_entry(catalog, key, unit.get('id'), source, target, notes)

        return catalog

    def _parse_version2(self, root, catalog : Catalog) -> Catalog:
        """
        XLIFF 2.x: the key is the unit name (or the segment source), notes live in a <notes> block
        """
        for unit in root.iter('{*}unit'):
            notes_element = _child(unit, 'notes')
            notes = [ CatalogNote(_text(note), note.get('category')) for note in _children(notes_element, 'note') ] if notes_element is not None else []

            for segment in _children(unit, 'segment'):
                source = _child(segment, 'source')
                target = _child(segment, 'target')

                key = unit.get('name') or _text(source)
                if not key:
                    continue

                self._add_entry(catalog, key, unit.get('id'), source, target, notes)

        return catalog

    def _add_entry(self, catalog : Catalog, key : str, entry_id : str|None, source, target, notes : list[CatalogNote]):
        catalog.Set(key, _text(target) if target is not None else _text(source))

        metadata = catalog.GetOrCreateMetadata(key)
        metadata.id = entry_id

        if target is not None:
            metadata.target_attributes.update({ str(name): str(value) for name, value in target.attrib.items() })

        metadata.notes.extend(notes)

        if metadata.is_empty:
            del catalog.metadata[key]

    def compose_catalog(self, catalog : Catalog, options : dict[str,Any]|None = None) -> str:
        """
        Compose an XLIFF 1.2 document. Source elements are left empty, the
        message key is written as `resname` and the original id is reused where known.
        """
        options = options or {}
        source_language = options.get('default_locale') or catalog.locale

        root = etree.Element(_tag('xliff'), nsmap={None: XLIFF_NAMESPACE})
        root.set('version', '1.2')

        file_element = etree.SubElement(root, _tag('file'))
        file_element.set('source-language', source_language)
        file_element.set('target-language', catalog.locale)
        file_element.set('datatype', 'plaintext')
        file_element.set('original', 'file.ext')

        body = etree.SubElement(file_element, _tag('body'))

        for key, text in catalog.items():
            metadata = catalog.GetMetadata(key)

            unit = etree.SubElement(body, _tag('trans-unit'))
            unit.set('id', metadata.id if metadata and metadata.id else key)
            unit.set('resname', key)

            etree.SubElement(unit, _tag('source'))

            target = etree.SubElement(unit, _tag('target'))
            if text:
                target.text = text

            if metadata:
                for name, value in metadata.target_attributes.items():
                    target.set(name, value)

                for note in metadata.notes:
                    note_element = etree.SubElement(unit, _tag('note'))
                    note_element.text = note.content
                    if note.origin:
                        note_element.set('from', note.origin)

        return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding='utf-8').decode('utf-8')

    def get_file_extensions(self) -> list[str]:
        return ['xlf', 'xliff']
