# This file is part of run_megahit.
#
# run_megahit is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# run_megahit is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with run_megahit. If not, see <https://www.gnu.org/licenses/>.

# copyright 2016 Ken Youens-Clark

import sys
from pathlib import Path
import argparse
import inspect

from .config import DEFAULTS, Resolve
from .discovery import Classify, FindInputs
from .errors import ExecutionError, UsageError
from .runner import Run
from .utils import NAME, USER, VERSION, ENTRY_POINTS
from . import logs

CLI_ENTRY = ENTRY_POINTS[0].split(" = ")[0]

class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_help(sys.stderr)
        self.exit(2, '\n%s: error: %s\n' % (self.prog, message))


class CommandLineInterface:
    def _get_fn_name(self):
        return inspect.stack()[1][3]

    def run(self, raw_args):
        parser = ArgumentParser(
            prog = f'{CLI_ENTRY} {self._get_fn_name()}',
            description = "Runs MEGAHIT on every read file found under --dir",
        )

        # dest names are tightly coupled to RunConfig fields in models.py
        paths = parser.add_argument_group(title="main")
        paths.add_argument("-d", "--dir", metavar="PATH", required=False,
            help="input directory, or a single read file")
        paths.add_argument("-o", "--out_dir", metavar="PATH", required=False,
            help="output directory, removed and recreated if it exists, default: ./megahit-out")

        kmers = parser.add_argument_group(title="megahit tuning")
        kmers.add_argument("-c", "--min_count", metavar="INT", type=int,
            help=f"minimum multiplicity for filtering (k_min+1)-mers, default: {DEFAULTS['min_count']}")
        kmers.add_argument("-n", "--k_min", metavar="INT", type=int,
            help=f"minimum kmer size (<= 255), must be odd number, default: {DEFAULTS['k_min']}")
        kmers.add_argument("-x", "--k_max", metavar="INT", type=int,
            help=f"maximum kmer size (<= 255), must be odd number, default: {DEFAULTS['k_max']}")
        kmers.add_argument("-s", "--k_step", metavar="INT", type=int,
            help=f"increment of kmer size of each iteration (<= 28), must be even number, default: {DEFAULTS['k_step']}")
        kmers.add_argument("-l", "--k_list", metavar="LIST",
            help="comma-separated list of kmer sizes (all odd, in the range 15-255, increment <= 28), overrides --k_min, --k_max and --k_step")
        kmers.add_argument("--min_contig_len", metavar="INT", type=int,
            help="minimum length of contigs to output")
        kmers.add_argument("--memory", metavar="FLOAT", type=float,
            help="max memory in byte, or a fraction of the machine's total memory if below 1")
        kmers.add_argument("-t", "--threads", metavar="INT", type=int,
            help="number of CPU threads for megahit")

        # "options" group
        parser.add_argument("-m", "--megahit", metavar="PATH", required=False,
            help="path to the MEGAHIT binary, default: bin/megahit beside this package, then megahit on PATH")
        parser.add_argument("--config", metavar="YAML", required=False,
            help="yaml file of option values, options given on the command line take precedence")
        parser.add_argument("--megahit_args", dest="extra_args", nargs='*', required=False,
            help="additional megahit cli args in the form of KEY=VALUE or KEY (no leading dashes)")
        parser.add_argument("--log", metavar="PATH", required=False,
            help="also append log messages to this file")
        parser.add_argument("--dry_run", action="store_true", default=None, required=False,
            help="print the megahit command without running it")
        parser.add_argument("--debug", action="store_true", default=None, required=False,
            help="verbose logging")
        args = parser.parse_args(raw_args)

        given = {k: v for k, v in args.__dict__.items() if k not in {"config", "log"}}
        try:
            config = Resolve(given, args.config)
        except UsageError as e:
            parser.error(str(e))

        log = logs.Init(config.debug, args.log)
        try:
            Run(config, log)
        except UsageError as e:
            parser.error(str(e))
        except ExecutionError as e:
            if e.killed: log.error("killed")
            print(str(e), file=sys.stderr)
            sys.exit(1)

    def classify(self, raw_args):
        parser = ArgumentParser(
            prog = f'{CLI_ENTRY} {self._get_fn_name()}',
            description = "Lists the read files under --dir and the megahit role given to each",
        )
        parser.add_argument("-d", "--dir", metavar="PATH", required=True,
            help="input directory, or a single read file")
        parser.add_argument("--save", metavar="PATH", required=False,
            help="write the manifest to this file, .json or .tsv")
        args = parser.parse_args(raw_args)

        try:
            manifest = Classify(FindInputs(args.dir))
        except UsageError as e:
            parser.error(str(e))

        print(manifest.ToTable().to_string(index=False))
        if args.save is not None:
            save = Path(args.save)
            if save.suffix == ".json":
                manifest.Save(save)
            else:
                manifest.SaveTable(save)

    def help(self, args=None):
        help = [
            f"{NAME} v{VERSION}",
            f"https://github.com/{USER}/{NAME}",
            f"",
            f"Syntax: {CLI_ENTRY} COMMAND [OPTIONS]",
            f"",
            f"Where COMMAND is one of:",
        ]+[f"- {k}" for k in COMMANDS]+[
            f"",
            f"options given without a COMMAND go to \"run\"",
            f"for additional help, use:",
            f"{CLI_ENTRY} COMMAND -h/--help",
        ]
        help = "\n".join(help)
        print(help)
COMMANDS = {k:v for k, v in CommandLineInterface.__dict__.items() if k[0]!="_"}

def main(argv: list[str]|None=None):
    argv = sys.argv[1:] if argv is None else argv
    cli = CommandLineInterface()
    if len(argv) == 0:
        cli.help()
        sys.exit(2)

    if argv[0].startswith("-") and argv[0] not in {"-h", "--help"}:
        # batch scripts call the wrapper with run's options directly
        return cli.run(argv)
    if argv[0] in {"-h", "--help"}:
        return cli.help()
    if argv[0] not in COMMANDS:
        cli.help()
        sys.exit(2)
    COMMANDS[argv[0]](cli, argv[1:]) # cli is instance of "self"

if __name__ == "__main__":
    main()
