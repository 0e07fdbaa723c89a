import os, sys
from pathlib import Path
import shutil

USER = "kyclark" # github id
MODULE_ROOT = Path("/".join(os.path.realpath(__file__).split('/')[:-1]))
NAME = MODULE_ROOT.name.lower()
ENTRY_POINTS = [f"{e} = {NAME}.cli:main" for e in [NAME, "rmh"]]

def _get_version() -> str:
    with open(MODULE_ROOT.joinpath("version.txt")) as v:
        return v.readline().strip()
VERSION = _get_version()

# the container images drop the prebuilt binary here
BUNDLED_BINARY = MODULE_ROOT.joinpath("bin/megahit")

def DefaultBinary() -> Path:
    if BUNDLED_BINARY.exists(): return BUNDLED_BINARY
    on_path = shutil.which("megahit")
    return Path(on_path) if on_path is not None else BUNDLED_BINARY

if __name__ == "__main__":
    sys.path = [str(p) for p in set([
        MODULE_ROOT.parents[1]
    ]+sys.path)]
    from setup import SHORT_SUMMARY
    if len(sys.argv)>1:
        k = sys.argv[1]
        meta = dict(
            USER = USER,
            NAME = NAME,
            ENTRY_POINTS = ENTRY_POINTS,
            VERSION = VERSION,
            SHORT_SUMMARY = SHORT_SUMMARY,
            MODULE_ROOT = MODULE_ROOT,
        )
        print(meta.get(k, ""))
