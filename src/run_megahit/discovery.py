import os
import re
from pathlib import Path

from .errors import UsageError
from .models import InputManifest, InputSpec, ReadRole

MATE_PATTERN = re.compile(r"[_.]r([12])[_.]")
INTERLEAVED_PATTERN = re.compile(r"[_.]paired[_.]")

def RemoveExt(f: str):
    toks = f.split(".")
    if len(toks)<2: return ".".join(toks), None
    return ".".join(toks[:-1]), toks[-1]

def _basename(name: str):
    stem, _ = RemoveExt(os.path.basename(name))
    return stem

def InferRole(name: str) -> ReadRole:
    """
    role of a read file from its name alone, the final extension is ignored
    so "x_r1_001.fastq" and "x.r1.fq.gz" are both forward mates

    names that match nothing are single end reads, this never raises
    """
    stem = _basename(name)
    m = MATE_PATTERN.search(stem)
    if m is not None:
        return ReadRole.FORWARD if m.group(1) == "1" else ReadRole.REVERSE
    if INTERLEAVED_PATTERN.search(stem) is not None:
        return ReadRole.INTERLEAVED
    return ReadRole.SINGLE

def MateKey(name: str) -> str|None:
    """name with the mate digit masked, "x_r1_001.fq" and "x_r2_001.fq" share "x_r#_001" """
    stem = _basename(name)
    m = MATE_PATTERN.search(stem)
    if m is None: return None
    return f"{stem[:m.start(1)]}#{stem[m.end(1):]}"

def FindInputs(location: str|Path, skip: str|Path|None=None) -> list[str]:
    """files under location, the folder skip (megahit's output) is never entered"""
    location = str(location)
    if os.path.isfile(location): return [location]

    skip = os.path.realpath(skip) if skip is not None else None
    files = []
    for root, dirs, names in os.walk(location):
        if skip is not None:
            dirs[:] = [d for d in dirs if os.path.realpath(os.path.join(root, d)) != skip]
        for n in names:
            p = os.path.join(root, n)
            if os.path.islink(p) or not os.path.isfile(p): continue
            files.append(p)
    if len(files) == 0:
        raise UsageError("No input data")
    return sorted(files)

def Classify(files: list[str]) -> InputManifest:
    return InputManifest([InputSpec(f, InferRole(f)) for f in files])

def PairMates(manifest: InputManifest):
    pairs: dict[str, dict[ReadRole, str]] = {}
    for spec in manifest.OfRole(ReadRole.FORWARD)+manifest.OfRole(ReadRole.REVERSE):
        # directory is part of the key, mates in different folders are not a pair
        key = os.path.join(os.path.dirname(spec.path), str(MateKey(spec.path)))
        pairs.setdefault(key, {})[spec.role] = spec.path

    complete = {k: v for k, v in pairs.items() if len(v) == 2}
    unpaired = [p for k, v in pairs.items() if len(v) != 2 for p in v.values()]
    return complete, unpaired
