import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from pubsuffix.nameprep import (
    ascii_nameprep,
    get_nameprep,
    idna_nameprep,
    lowercase_nameprep,
)


class TestNamePrep(unittest.TestCase):
    def test_ascii(self):
        """The default passes labels through untouched"""
        for label in ("com", "COM", "游戏", "xn--unup4y", ""):
            self.assertEqual(ascii_nameprep(label), label)

    def test_lowercase(self):
        self.assertEqual(lowercase_nameprep("GitHub"), "github")

    def test_idna(self):
        self.assertEqual(idna_nameprep("com"), "com")
        self.assertEqual(idna_nameprep("CoM"), "com")
        self.assertEqual(idna_nameprep("bücher"), "xn--bcher-kva")
        self.assertEqual(idna_nameprep("BÜCHER"), "xn--bcher-kva")
        # already converted labels are kept
        self.assertEqual(idna_nameprep("xn--bcher-kva"), "xn--bcher-kva")

    def test_idna_failure(self):
        """A label the codec refuses is returned lower cased"""
        label = "A" * 64
        with self.assertLogs("pubsuffix.nameprep", level="DEBUG") as logs:
            self.assertEqual(idna_nameprep(label), "a" * 64)
        # lookups pass caller input through here, so failures stay at debug level
        self.assertEqual([r.levelname for r in logs.records], ["DEBUG"])

    def test_get_nameprep(self):
        self.assertIs(get_nameprep("ascii"), ascii_nameprep)
        self.assertIs(get_nameprep("lower"), lowercase_nameprep)
        self.assertIs(get_nameprep("idna"), idna_nameprep)
        with self.assertRaises(ValueError):
            get_nameprep("punycode")


if __name__ == "__main__":
    unittest.main()
