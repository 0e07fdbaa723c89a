import os
from pathlib import Path
from typing import Any, Callable
import yaml

from .errors import UsageError
from .models import RunConfig
from .utils import DefaultBinary

# megahit's own recommended values, so the wrapper works with no tuning flags at all
DEFAULTS: dict[str, Any] = dict(
    min_count = 2,
    k_min = 21,
    k_max = 99,
    k_step = 20,
)

def ParseKList(raw) -> list[int]:
    if isinstance(raw, int): raw = [raw]
    if isinstance(raw, str): raw = [t for t in raw.replace(" ", "").split(",") if len(t)>0]
    try:
        return [int(k) for k in raw]
    except (TypeError, ValueError):
        raise UsageError(f"k_list must be a comma separated list of integers, got [{raw}]")

def ParsePassThrough(raw) -> list[str]:
    """KEY=VALUE or KEY (no leading dashes) into megahit flags"""
    if isinstance(raw, str): raw = [raw]
    args = []
    for a in raw:
        a = str(a)
        if "=" in a:
            toks = a.split("=")
            args += [f"--{toks[0]}", '='.join(toks[1:])]
        else:
            args.append(f"--{a}")
    return args

def _number(t: Callable):
    def _parse(name, v):
        try:
            return t(v)
        except (TypeError, ValueError):
            raise UsageError(f"{name} must be a number, got [{v}]")
    return _parse

_int, _float = _number(int), _number(float)
COERCE: dict[str, Callable[[str, Any], Any]] = dict(
    dir = lambda _, v: Path(v),
    out_dir = lambda _, v: Path(v),
    megahit = lambda _, v: Path(v),
    min_count = _int,
    k_min = _int,
    k_max = _int,
    k_step = _int,
    k_list = lambda _, v: ParseKList(v),
    min_contig_len = _int,
    memory = _float,
    threads = _int,
    extra_args = lambda _, v: ParsePassThrough(v),
    dry_run = lambda _, v: bool(v),
    debug = lambda _, v: bool(v),
)

def LoadConfigFile(path: str|Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise UsageError(f"config file [{path}] does not exist")
    try:
        with open(path) as y:
            raw = yaml.safe_load(y)
    except yaml.YAMLError as e:
        raise UsageError(f"config file [{path}] is not valid yaml: {e}")
    if raw is None: return {}
    if not isinstance(raw, dict):
        raise UsageError(f"config file [{path}] must be a mapping of option names to values")

    raw = {str(k).replace("-", "_"): v for k, v in raw.items()}
    known = set(RunConfig.FieldNames())
    unknown = [k for k in raw if k not in known]
    if len(unknown)>0:
        raise UsageError(f"config file [{path}] has unknown options {unknown}")
    return raw

def Resolve(given: dict[str, Any], config_file: str|Path|None=None) -> RunConfig:
    """defaults, then the config file, then options given on the command line"""
    merged = dict(DEFAULTS)
    if config_file is not None:
        merged.update(LoadConfigFile(config_file))
    merged.update({k: v for k, v in given.items() if v is not None})

    if not merged.get("dir"):
        raise UsageError("No input --dir")
    if merged.get("out_dir") is None: merged["out_dir"] = Path(os.getcwd()).joinpath("megahit-out")
    if merged.get("megahit") is None: merged["megahit"] = DefaultBinary()

    # a null in the config file switches off a default tuning flag
    NOT_NULLABLE = {"extra_args", "dry_run", "debug"}
    values = {}
    for k, v in merged.items():
        if k not in COERCE: continue
        if v is None:
            if k in NOT_NULLABLE: continue
            values[k] = None
        else:
            values[k] = COERCE[k](k, v)
    return RunConfig(**values)
