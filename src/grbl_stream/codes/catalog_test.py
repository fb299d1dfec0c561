import unittest

from ..errors import CommandError
from .catalog import Catalog, ErrorCode, load_catalog


class TestCatalog(unittest.TestCase):

    def test_bundled_error_codes(self):
        row = load_catalog().error("9")
        self.assertIsNotNone(row)
        self.assertEqual(row.message, "G-code lock")
        self.assertEqual(row.description, "G-code commands are locked out during alarm or jog state.")

    def test_bundled_setting_codes(self):
        row = load_catalog().setting("0")
        self.assertEqual(row.setting, "Step pulse time")
        self.assertEqual(row.units, "microseconds")

    def test_message_with_punctuation(self):
        row = load_catalog().error("7")
        self.assertEqual(row.message, "EEPROM read fail. Using defaults")

    def test_loaded_once(self):
        self.assertIs(load_catalog(), load_catalog())

    def test_unknown_codes(self):
        catalog = load_catalog()
        self.assertIsNone(catalog.error("999"))
        self.assertIsNone(catalog.setting("999"))

    def test_command_error_from_code(self):
        catalog = Catalog(errors=[ErrorCode("9", "G-code lock", "Locked out.")])
        error = CommandError.from_code("9", catalog)
        self.assertEqual((error.code, error.message, error.description), ("9", "G-code lock", "Locked out."))
        self.assertIn("code: 9", str(error))

    def test_command_error_from_unknown_code(self):
        error = CommandError.from_code("77", Catalog())
        self.assertEqual((error.code, error.message, error.description), ("77", "", ""))

if __name__ == '__main__':
    unittest.main()
