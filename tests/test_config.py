import logging
import os
import tempfile
import unittest

from staphcgi import config


class TestConfig(unittest.TestCase):
    def write_config(self, text):
        handle, path = tempfile.mkstemp(suffix=".ini")
        with os.fdopen(handle, "w") as file:
            file.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_defaults(self):
        self.assertEqual(config.load(), config.DEFAULTS)
        self.assertEqual(config.load("/nonexistent/config.ini"), config.DEFAULTS)
        self.assertEqual(config.load_from({}), config.DEFAULTS)

    def test_values(self):
        path = self.write_config(
            "[Request]\nmeta headers = no\n"
            "[Response]\nerror status = 502\n"
            "[Logging]\nlevel = debug\n"
        )
        conf = config.load_from({config.ENV_VAR: path})
        self.assertFalse(conf["meta_headers"])
        self.assertEqual(conf["error_status"], 502)
        self.assertEqual(conf["log_level"], logging.DEBUG)

    def test_partial_file(self):
        path = self.write_config("[Response]\nerror status = 503\n")
        conf = config.load(path)
        self.assertTrue(conf["meta_headers"])
        self.assertEqual(conf["error_status"], 503)

    def test_bad_values(self):
        for text in (
            "[Response]\nerror status = many\n",
            "[Response]\nerror status = 42\n",
            "[Logging]\nlevel = LOUD\n",
        ):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    config.load(self.write_config(text))

    def test_unparsable_file(self):
        for text in (
            "error status = 500\n",
            "[Response]\nerror status = 500\nerror status = 501\n",
            "[Response]\n[Response]\n",
        ):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    config.load(self.write_config(text))


if __name__ == "__main__":
    unittest.main()
