import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from raga.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "test.raga")

    def tearDown(self):
        self.tmp.cleanup()

    def run_main(self, text=None):
        """Runs main on self.path (written with text, if given) and returns (stdout, exit code or None)."""
        if text is not None:
            with open(self.path, "w") as file:
                file.write(text)

        out = io.StringIO()
        code = None
        with mock.patch.object(sys, "argv", ["raga", self.path]), redirect_stdout(out):
            try:
                main()
            except SystemExit as exc:
                code = exc.code
        return out.getvalue(), code

    def test_file(self):
        printed, code = self.run_main("let a = 10 / 2\n{\n    let b = a * 2\n    b\n}\nfn f x => x\na - 6\n")
        self.assertIsNone(code)
        self.assertEqual("Unit\n10\nUnit\n-1\n", printed)

    def test_eval_error_keeps_earlier_results(self):
        printed, code = self.run_main("1 + 1\n2 * 3\nnope\n4\n")
        self.assertEqual(1, code)
        self.assertTrue(printed.startswith("2\n6\n"), printed)
        self.assertIn("line 3:", printed)
        self.assertIn("does not exist", printed)
        self.assertNotIn("\n4\n", printed)

    def test_parse_error_runs_nothing(self):
        printed, code = self.run_main("1 + 1\nlet b 2\n")
        self.assertEqual(1, code)
        self.assertFalse(printed.startswith("2\n"), printed)
        self.assertIn("input was not consumed fully by parser", printed)

    def test_missing_file(self):
        printed, code = self.run_main()
        self.assertEqual(1, code)
        self.assertIn("could not be opened", printed)


if __name__ == '__main__':
    unittest.main()
