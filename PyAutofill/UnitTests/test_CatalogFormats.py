import os
import tempfile
import unittest
from unittest.mock import patch

from PyAutofill.AutofillError import AutofillError, CatalogParseError, CatalogWriteError, ConfigurationError
from PyAutofill.Catalog import CatalogNote, NEEDS_REVIEW_STATE, PROVENANCE_TAG
from PyAutofill.CatalogFileHandler import FlattenMessages
from PyAutofill.CatalogFormat import CatalogFormat
from PyAutofill.CatalogService import CatalogService
from PyAutofill.Formats.JsonFileHandler import JsonFileHandler
from PyAutofill.Formats.PhpFileHandler import PhpFileHandler
from PyAutofill.Formats.XliffFileHandler import XliffFileHandler
from PyAutofill.Formats.YamlFileHandler import YamlFileHandler
from PyAutofill.Helpers.Tests import BuildCatalog, WriteFile, log_info, log_input_expected_error, log_input_expected_result, log_test_name

xliff_content = """<?xml version="1.0" encoding="utf-8"?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">
  <file source-language="en" target-language="de" datatype="plaintext" original="file.ext">
    <body>
      <trans-unit id="abc123" resname="greeting">
        <source>Hello</source>
        <target state="translated">Hallo</target>
        <note from="translator">Informal</note>
      </trans-unit>
      <trans-unit id="farewell">
        <source>farewell</source>
      </trans-unit>
      <trans-unit id="u3" resname="empty">
        <source>Empty</source>
        <target></target>
      </trans-unit>
    </body>
  </file>
</xliff>
"""

plain_xliff_content = """<xliff version="1.2">
  <file source-language="en" datatype="plaintext" original="file.ext">
    <body>
      <trans-unit id="1" resname="title">
        <source>Title</source>
      </trans-unit>
    </body>
  </file>
</xliff>
"""

xliff2_content = """<?xml version="1.0" encoding="utf-8"?>
<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en" trgLang="de">
  <file id="f1">
    <unit id="u1" name="greeting">
      <notes>
        <note category="context">Home page</note>
      </notes>
      <segment>
        <source>Hello</source>
        <target state="translated">Hallo</target>
      </segment>
    </unit>
    <unit id="u2">
      <segment>
        <source>Goodbye</source>
      </segment>
    </unit>
  </file>
</xliff>
"""

php_content = """<?php

// Messages
return [
    'greeting' => 'Hello',
    "farewell" => "Good\\nbye",
    'nested' => [
        'key' => 'It\\'s nested',
    ],
    'count' => 3,
];
"""

class TestCatalogFormat(unittest.TestCase):
    detect_cases = [
        ("messages.de.xlf", CatalogFormat.XLIFF),
        ("messages.de.xliff", CatalogFormat.XLIFF),
        ("messages.de.XLF", CatalogFormat.XLIFF),
        ("messages.de.yaml", CatalogFormat.YAML),
        ("messages.de.yml", CatalogFormat.YAML),
        ("messages.de.json", CatalogFormat.JSON),
        ("messages.de.php", CatalogFormat.PHP),
        ("messages.de.txt", CatalogFormat.XLIFF),
        ("messages", CatalogFormat.XLIFF),
    ]

    def test_Detect(self):
        log_test_name("CatalogFormat.Detect")
        for path, expected in self.detect_cases:
            with self.subTest(path=path):
                result = CatalogFormat.Detect(path)
                log_input_expected_result(path, expected, result)
                self.assertEqual(result, expected)

    def test_FromName(self):
        log_test_name("CatalogFormat.FromName")
        for name, expected in [ ("xliff", CatalogFormat.XLIFF), ("YAML", CatalogFormat.YAML), (" json ", CatalogFormat.JSON), ("php", CatalogFormat.PHP) ]:
            with self.subTest(name=name):
                result = CatalogFormat.FromName(name)
                log_input_expected_result(name, expected, result)
                self.assertEqual(result, expected)

        with self.assertRaises(ConfigurationError) as context:
            CatalogFormat.FromName("csv")

        log_input_expected_error("csv", ConfigurationError, context.exception)

    def test_MatchesFile(self):
        log_test_name("CatalogFormat.MatchesFile")
        self.assertTrue(CatalogFormat.YAML.MatchesFile("messages.en.yml"))
        self.assertFalse(CatalogFormat.YAML.MatchesFile("messages.en.json"))

    def test_FlattenMessages(self):
        log_test_name("FlattenMessages")
        messages = { 'a': { 'b': 'x', 'c': { 'd': 'y' } }, 'e': None, 'f': 3, 'g': True }
        expected = { 'a.b': 'x', 'a.c.d': 'y', 'e': '', 'f': '3', 'g': 'true' }
        result = FlattenMessages(messages)
        log_input_expected_result(messages, expected, result)
        self.assertEqual(result, expected)

class TestXliffFileHandler(unittest.TestCase):
    def setUp(self):
        self.handler = XliffFileHandler()

    def test_ParseXliff(self):
        log_test_name("XliffFileHandler.parse_string")
        catalog = self.handler.parse_string(xliff_content, 'de')

        log_input_expected_result("keys", ['greeting', 'farewell', 'empty'], catalog.keys)
        self.assertEqual(catalog.keys, ['greeting', 'farewell', 'empty'])
        self.assertEqual(catalog.Get('greeting'), 'Hallo')
        self.assertEqual(catalog.Get('farewell'), 'farewell')
        self.assertEqual(catalog.Get('empty'), '')
        self.assertFalse(catalog.IsTranslated('empty'))

        metadata = catalog.GetMetadata('greeting')
        self.assertIsNotNone(metadata)
        if metadata:
            self.assertEqual(metadata.id, 'abc123')
            self.assertEqual(metadata.target_attributes, { 'state': 'translated' })
            self.assertEqual(metadata.notes, [ CatalogNote('Informal', 'translator') ])

        farewell = catalog.GetMetadata('farewell')
        self.assertIsNotNone(farewell)
        if farewell:
            self.assertEqual(farewell.id, 'farewell')

    def test_ParsePlainXliff(self):
        log_test_name("XliffFileHandler without namespace")
        catalog = self.handler.parse_string(plain_xliff_content, 'en')
        log_input_expected_result(plain_xliff_content, { 'title': 'Title' }, catalog.entries)
        self.assertEqual(catalog.entries, { 'title': 'Title' })

    def test_ParseXliff2(self):
        log_test_name("XliffFileHandler reads XLIFF 2.0")
        catalog = self.handler.parse_string(xliff2_content, 'de')

        expected = { 'greeting': 'Hallo', 'Goodbye': 'Goodbye' }
        log_input_expected_result("entries", expected, catalog.entries)
        self.assertEqual(catalog.entries, expected)

        metadata = catalog.GetMetadata('greeting')
        self.assertIsNotNone(metadata)
        if metadata:
            self.assertEqual(metadata.id, 'u1')
            self.assertEqual(metadata.target_attributes, { 'state': 'translated' })
            self.assertEqual(metadata.notes, [ CatalogNote('Home page', 'context') ])

        goodbye = catalog.GetMetadata('Goodbye')
        self.assertEqual(goodbye.id if goodbye else None, 'u2')

    def test_UnsupportedDocuments(self):
        log_test_name("XliffFileHandler rejects unknown documents")
        cases = [
            '<xliff version="3.0"><file/></xliff>',
            '<resources><string name="greeting">Hello</string></resources>',
        ]
        for content in cases:
            with self.subTest(content=content):
                with self.assertRaises(CatalogParseError) as context:
                    self.handler.parse_string(content, 'de')

                log_input_expected_error(content, CatalogParseError, context.exception)

    def test_ParseError(self):
        log_test_name("XliffFileHandler parse error")
        with self.assertRaises(CatalogParseError) as context:
            self.handler.parse_string("<xliff><file>", 'de')

        log_input_expected_error("<xliff><file>", CatalogParseError, context.exception)

    def test_ComposeXliff(self):
        log_test_name("XliffFileHandler.compose_catalog")
        catalog = BuildCatalog('de', { 'greeting': 'Hallo', 'farewell': '' }, ids={ 'greeting': 'g-1' })
        metadata = catalog.GetOrCreateMetadata('greeting')
        metadata.target_attributes['state'] = NEEDS_REVIEW_STATE
        metadata.notes.append(CatalogNote('Auto-translated by DeepL (en → de)', PROVENANCE_TAG))

        content = self.handler.compose_catalog(catalog, { 'default_locale': 'en' })
        log_info(content)

        self.assertIn('source-language="en"', content)
        self.assertIn('target-language="de"', content)
        self.assertIn('id="g-1"', content)
        self.assertIn('resname="greeting"', content)
        self.assertIn('id="farewell"', content)
        self.assertIn('<source/>', content)
        self.assertIn('state="needs-review-translation"', content)
        self.assertIn('from="deepl-autofill"', content)

        reloaded = self.handler.parse_string(content, 'de')
        self.assertEqual(reloaded.entries, { 'greeting': 'Hallo', 'farewell': '' })

        reloaded_metadata = reloaded.GetMetadata('greeting')
        self.assertIsNotNone(reloaded_metadata)
        if reloaded_metadata:
            self.assertEqual(reloaded_metadata.id, 'g-1')
            self.assertEqual(reloaded_metadata.target_attributes, { 'state': NEEDS_REVIEW_STATE })
            self.assertEqual(reloaded_metadata.notes, [ CatalogNote('Auto-translated by DeepL (en → de)', PROVENANCE_TAG) ])

class TestYamlFileHandler(unittest.TestCase):
    def setUp(self):
        self.handler = YamlFileHandler()

    def test_ParseYaml(self):
        log_test_name("YamlFileHandler.parse_string")
        content = "greeting: Hello\nnav:\n  home: Home\n  about: About\ncount: 3\n"
        expected = { 'greeting': 'Hello', 'nav.home': 'Home', 'nav.about': 'About', 'count': '3' }
        catalog = self.handler.parse_string(content, 'en')
        log_input_expected_result(content, expected, catalog.entries)
        self.assertEqual(catalog.entries, expected)
        self.assertEqual(catalog.keys, list(expected.keys()))

    def test_ParseEmptyYaml(self):
        log_test_name("YamlFileHandler empty file")
        catalog = self.handler.parse_string("", 'en')
        self.assertEqual(len(catalog), 0)

    def test_ParseErrors(self):
        log_test_name("YamlFileHandler parse errors")
        for content in [ "key: [unclosed", "- a\n- b\n" ]:
            with self.subTest(content=content):
                with self.assertRaises(CatalogParseError) as context:
                    self.handler.parse_string(content, 'en')

                log_input_expected_error(content, CatalogParseError, context.exception)

    def test_ComposeYaml(self):
        log_test_name("YamlFileHandler.compose_catalog")
        catalog = BuildCatalog('de', { 'nav.home': 'Startseite', 'greeting': 'Grüß dich' })
        expected = "nav.home: Startseite\ngreeting: Grüß dich\n"
        result = self.handler.compose_catalog(catalog)
        log_input_expected_result(catalog.entries, expected, result)
        self.assertEqual(result, expected)
        self.assertEqual(self.handler.get_file_extensions()[0], 'yml')

class TestJsonFileHandler(unittest.TestCase):
    def setUp(self):
        self.handler = JsonFileHandler()

    def test_ParseJson(self):
        log_test_name("JsonFileHandler.parse_string")
        content = '{"a": {"b": "x"}, "c": "y"}'
        expected = { 'a.b': 'x', 'c': 'y' }
        catalog = self.handler.parse_string(content, 'en')
        log_input_expected_result(content, expected, catalog.entries)
        self.assertEqual(catalog.entries, expected)

    def test_ParseErrors(self):
        log_test_name("JsonFileHandler parse errors")
        for content in [ '{"a": ', '["a", "b"]' ]:
            with self.subTest(content=content):
                with self.assertRaises(CatalogParseError) as context:
                    self.handler.parse_string(content, 'en')

                log_input_expected_error(content, CatalogParseError, context.exception)

    def test_ComposeJson(self):
        log_test_name("JsonFileHandler.compose_catalog")
        catalog = BuildCatalog('de', { 'greeting': 'Grüß dich' })
        expected = '{\n    "greeting": "Grüß dich"\n}\n'
        result = self.handler.compose_catalog(catalog)
        log_input_expected_result(catalog.entries, expected, result)
        self.assertEqual(result, expected)

class TestPhpFileHandler(unittest.TestCase):
    def setUp(self):
        self.handler = PhpFileHandler()

    def test_ParsePhp(self):
        log_test_name("PhpFileHandler.parse_string")
        expected = { 'greeting': 'Hello', 'farewell': 'Good\nbye', 'nested.key': "It's nested", 'count': '3' }
        catalog = self.handler.parse_string(php_content, 'en')
        log_input_expected_result(php_content, expected, catalog.entries)
        self.assertEqual(catalog.entries, expected)

    def test_ParseArraySyntax(self):
        log_test_name("PhpFileHandler array() syntax")
        content = "<?php\n\nreturn array (\n  'a' => 'b',\n  'c' => array('d' => 'e'),\n);\n"
        expected = { 'a': 'b', 'c.d': 'e' }
        catalog = self.handler.parse_string(content, 'en')
        log_input_expected_result(content, expected, catalog.entries)
        self.assertEqual(catalog.entries, expected)

    def test_ParseErrors(self):
        log_test_name("PhpFileHandler parse errors")
        for content in [ "<?php\n$messages = 1;\n", "<?php\nreturn [ 'a' => 'b' ", "<?php\nreturn [ 'a' 'b' ];" ]:
            with self.subTest(content=content):
                with self.assertRaises(CatalogParseError) as context:
                    self.handler.parse_string(content, 'en')

                log_input_expected_error(content, CatalogParseError, context.exception)

    def test_ComposePhp(self):
        log_test_name("PhpFileHandler.compose_catalog")
        catalog = BuildCatalog('de', { 'greeting': "It's", 'path': 'C:\\dir' })
        expected = "<?php\n\nreturn array (\n  'greeting' => 'It\\'s',\n  'path' => 'C:\\\\dir',\n);\n"
        result = self.handler.compose_catalog(catalog)
        log_input_expected_result(catalog.entries, expected, result)
        self.assertEqual(result, expected)

        reloaded = self.handler.parse_string(result, 'de')
        self.assertEqual(reloaded.entries, catalog.entries)

class TestCatalogService(unittest.TestCase):
    def setUp(self):
        self.service = CatalogService()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.directory = self.temp_dir.name

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_LoadNonexistentCatalog(self):
        log_test_name("LoadCatalog for a missing file")
        path = os.path.join(self.directory, "messages.de.xlf")
        catalog = self.service.LoadCatalog(path, 'de', 'messages')
        log_input_expected_result(path, 0, len(catalog))
        self.assertEqual(len(catalog), 0)
        self.assertEqual(catalog.locale, 'de')
        self.assertEqual(catalog.domain, 'messages')

    def test_LoadByExtension(self):
        log_test_name("LoadCatalog by extension")
        path = WriteFile(self.directory, "messages.en.yml", "greeting: Hello\n")
        catalog = self.service.LoadCatalog(path, 'en', 'messages')
        log_input_expected_result(path, { 'greeting': 'Hello' }, catalog.entries)
        self.assertEqual(catalog.entries, { 'greeting': 'Hello' })

    def test_SaveToTargetPath(self):
        log_test_name("SaveCatalog to target path")
        catalog = BuildCatalog('de', { 'greeting': 'Hallo' })
        target_path = os.path.join(self.directory, "nested", "messages.de.json")
        result = self.service.SaveCatalog(catalog, CatalogFormat.JSON, target_path=target_path)
        log_input_expected_result(target_path, os.path.normpath(target_path), result)
        self.assertEqual(result, os.path.normpath(target_path))
        self.assertTrue(os.path.exists(target_path))

        reloaded = self.service.LoadCatalog(target_path, 'de')
        self.assertEqual(reloaded.entries, { 'greeting': 'Hallo' })

    def test_SaveToOutputDirectory(self):
        log_test_name("SaveCatalog to output directory")
        catalog = BuildCatalog('de', { 'greeting': 'Hallo' })

        result = self.service.SaveCatalog(catalog, CatalogFormat.YAML, output_dir=self.directory)
        expected = os.path.join(self.directory, "messages.de.yml")
        log_input_expected_result("default extension", expected, result)
        self.assertEqual(result, os.path.normpath(expected))

        result = self.service.SaveCatalog(catalog, CatalogFormat.YAML, output_dir=self.directory, target_extension='yaml')
        expected = os.path.join(self.directory, "messages.de.yaml")
        log_input_expected_result("yaml extension", expected, result)
        self.assertEqual(result, os.path.normpath(expected))

    def test_SaveWriteErrors(self):
        log_test_name("SaveCatalog write errors")
        blocking_file = WriteFile(self.directory, "not-a-directory", "")
        existing_directory = os.path.join(self.directory, "messages.de.json")
        os.makedirs(existing_directory)

        cases = [
            os.path.join(blocking_file, "messages.de.json"),
            existing_directory,
        ]
        for target_path in cases:
            with self.subTest(target_path=target_path):
                with self.assertRaises(CatalogWriteError) as context:
                    self.service.SaveCatalog(BuildCatalog('de', { 'greeting': 'Hallo' }), CatalogFormat.JSON, target_path=target_path)

                log_input_expected_error(target_path, CatalogWriteError, context.exception)
                self.assertEqual(context.exception.path, os.path.normpath(target_path))
                self.assertIsInstance(context.exception.error, OSError)

    def test_SaveAsUtf8(self):
        log_test_name("SaveCatalog always writes UTF-8")
        catalog = BuildCatalog('de', { 'greeting': 'Grüß dich' })
        with patch.dict(os.environ, { 'DEFAULT_ENCODING': 'latin-1' }):
            path = self.service.SaveCatalog(catalog, CatalogFormat.XLIFF, output_dir=self.directory)

        with open(path, 'rb') as f:
            content = f.read()

        log_input_expected_result(path, True, 'Grüß dich'.encode('utf-8') in content)
        self.assertIn('Grüß dich'.encode('utf-8'), content)
        self.assertEqual(self.service.LoadCatalog(path, 'de').Get('greeting'), 'Grüß dich')

    def test_SaveWithoutDestination(self):
        log_test_name("SaveCatalog without destination")
        with self.assertRaises(AutofillError) as context:
            self.service.SaveCatalog(BuildCatalog('de', {}), CatalogFormat.JSON)

        log_input_expected_error("no destination", AutofillError, context.exception)

if __name__ == '__main__':
    unittest.main()
