import os
import shutil
import logging
from pathlib import Path

from .command import BuildCommand
from .discovery import Classify, FindInputs, PairMates
from .errors import ExecutionError, UsageError
from .models import InputManifest, ReadRole, RunConfig
from .process_management import Shell
from . import logs

def ValidateBinary(megahit: Path):
    if not megahit.is_file() or megahit.stat().st_size == 0:
        raise UsageError(f"Cannot find binary ({megahit})")

def ValidateOutput(out_dir: Path, location: Path):
    out_dir, location = out_dir.resolve(), location.resolve()
    if out_dir == location or out_dir in location.parents:
        raise UsageError(f"output directory ({out_dir}) would remove the input ({location})")

def PrepareOutput(out_dir: Path):
    if out_dir.is_dir() and not out_dir.is_symlink():
        shutil.rmtree(out_dir)
    elif out_dir.exists() or out_dir.is_symlink():
        os.unlink(out_dir)
    os.makedirs(out_dir)

def ResolveInputs(location: Path, log: logging.Logger, skip: Path|None=None) -> InputManifest:
    if os.path.isfile(location):
        log.debug(f"input [{location}] is a file")
    else:
        log.debug(f"looking for files in [{location}]")
    files = FindInputs(location, skip)
    log.info(f"Found {len(files)} files")

    manifest = Classify(files)
    counts = manifest.Counts()
    pairs, unpaired = PairMates(manifest)
    log.info(
        f"Processing {len(pairs)} pair, {counts[ReadRole.INTERLEAVED]} interleaved, "
        + f"{counts[ReadRole.SINGLE]+len(unpaired)} single."
    )
    for p in unpaired:
        log.warning(f"[{p}] has no matching mate, passed as single end reads")
    for spec in manifest:
        log.debug(f"{spec.role.flag:>4} {spec.path}")
    return manifest

def Run(config: RunConfig, log: logging.Logger|None=None) -> Path:
    """
    finds and classifies the reads under config.dir, then runs megahit on them
    with a fresh config.out_dir

    raises UsageError before anything is touched on disk and ExecutionError if
    megahit does not exit cleanly, the output folder is then left as megahit left it
    """
    if log is None: log = logs.Init(config.debug)
    log.debug(f"config = {config.AsDict()}")

    ValidateBinary(config.megahit)
    ValidateOutput(config.out_dir, config.dir)
    manifest = ResolveInputs(config.dir, log, skip=config.out_dir)
    cmd = BuildCommand(config, manifest)
    log.debug(f"command: {' '.join(cmd)}")

    if config.dry_run:
        print(' '.join(cmd))
        return config.out_dir

    PrepareOutput(config.out_dir)
    try:
        result = Shell(cmd)
    except OSError as e:
        raise ExecutionError(cmd, None) from e
    if not result.ok:
        raise ExecutionError(cmd, result.exit_code, result.killed)

    print(f"Finished, see results in '{config.out_dir}'")
    return config.out_dir
