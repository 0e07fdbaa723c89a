import os
import tempfile
import unittest
from pathlib import Path

from run_megahit.config import DEFAULTS, LoadConfigFile, ParseKList, ParsePassThrough, Resolve
from run_megahit.errors import UsageError
from run_megahit.utils import DefaultBinary


class TestResolve(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.ws = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _yaml(self, text: str):
        p = self.ws.joinpath("config.yml")
        p.write_text(text)
        return p

    def test_defaults(self):
        config = Resolve(dict(dir="reads"))
        self.assertEqual(Path("reads"), config.dir)
        self.assertEqual(Path(os.getcwd()).joinpath("megahit-out"), config.out_dir)
        self.assertEqual(DefaultBinary(), config.megahit)
        self.assertEqual((2, 21, 99, 20), (config.min_count, config.k_min, config.k_max, config.k_step))
        self.assertIsNone(config.k_list)
        self.assertEqual([], config.extra_args)
        self.assertFalse(config.debug)
        self.assertFalse(config.dry_run)

    def test_none_means_not_given(self):
        config = Resolve(dict(dir="reads", k_min=None, debug=None, extra_args=None))
        self.assertEqual(DEFAULTS["k_min"], config.k_min)
        self.assertFalse(config.debug)

    def test_missing_dir(self):
        with self.assertRaises(UsageError):
            Resolve(dict(out_dir="x"))

    def test_config_file_then_command_line(self):
        cfg = self._yaml("\n".join([
            "dir: from_file",
            "k-min: 31",
            "k_max: 141",
            "k_list: [21, 41]",
            "extra_args: [no-mercy, presets=meta-large]",
            "debug: true",
        ]))
        config = Resolve(dict(k_min=27), cfg)
        self.assertEqual(Path("from_file"), config.dir)
        self.assertEqual(27, config.k_min)
        self.assertEqual(141, config.k_max)
        self.assertEqual([21, 41], config.k_list)
        self.assertEqual(["--no-mercy", "--presets", "meta-large"], config.extra_args)
        self.assertTrue(config.debug)

        config = Resolve(dict(dir="cli_reads"), cfg)
        self.assertEqual(Path("cli_reads"), config.dir)

    def test_null_switches_off_a_default(self):
        config = Resolve({}, self._yaml("dir: reads\nmin_count: null\n"))
        self.assertIsNone(config.min_count)

    def test_bad_config_files(self):
        with self.assertRaises(UsageError):
            LoadConfigFile(self.ws.joinpath("missing.yml"))
        with self.assertRaises(UsageError):
            LoadConfigFile(self._yaml("dir: reads\nkmer_size: 31\n"))
        with self.assertRaises(UsageError):
            LoadConfigFile(self._yaml("- just\n- a list\n"))
        with self.assertRaises(UsageError):
            LoadConfigFile(self._yaml("dir: [unclosed\n"))
        self.assertEqual({}, LoadConfigFile(self._yaml("")))

    def test_bad_numbers(self):
        with self.assertRaises(UsageError):
            Resolve({}, self._yaml("dir: reads\nk_min: odd\n"))
        with self.assertRaises(UsageError):
            Resolve(dict(dir="reads", memory="lots"))


class TestParsers(unittest.TestCase):
    def test_k_list(self):
        self.assertEqual([21, 41, 61], ParseKList("21,41,61"))
        self.assertEqual([21, 41], ParseKList("21, 41,"))
        self.assertEqual([21, 41], ParseKList([21, "41"]))
        self.assertEqual([31], ParseKList(31))
        with self.assertRaises(UsageError):
            ParseKList("21,forty")

    def test_pass_through(self):
        self.assertEqual(["--no-mercy"], ParsePassThrough("no-mercy"))
        self.assertEqual(
            ["--presets", "meta-large", "--out-prefix", "a=b"],
            ParsePassThrough(["presets=meta-large", "out-prefix=a=b"]),
        )


if __name__ == '__main__':
    unittest.main()
