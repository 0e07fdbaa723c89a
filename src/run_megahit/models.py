import os
from dataclasses import dataclass, field, fields, asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any
import json
import pandas as pd

class Saveable:
    def Save(self, path: str|Path):
        path = Path(path)
        if not path.parent.exists(): os.makedirs(path.parent)

        def _can_save(k, v):
            if k.upper() == k: return False
            if callable(v): return False
            if isinstance(k, str) and k[0] == "_": return False
            return True

        def _stringyfy(v):
            if isinstance(v, Enum):
                return v.value
            elif is_dataclass(v):
                return _stringyfy(asdict(v))
            elif isinstance(v, (list, tuple)):
                return [_stringyfy(x) for x in v]
            elif isinstance(v, dict):
                return {k:_stringyfy(x) for k, x in v.items()}
            elif v is None or isinstance(v, (bool, int, float)):
                return v
            else:
                return str(v)
        with open(path, "w") as j:
            json.dump(_stringyfy({k:v for k, v in self.__dict__.items() if _can_save(k, v)}), j, indent=4)

class ReadRole(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"
    INTERLEAVED = "interleaved"
    SINGLE = "single"

    @property
    def flag(self) -> str:
        return _FLAGS[self]

_FLAGS = {
    ReadRole.FORWARD: "-1",
    ReadRole.REVERSE: "-2",
    ReadRole.INTERLEAVED: "--12",
    ReadRole.SINGLE: "-r",
}

@dataclass(frozen=True)
class InputSpec:
    path: str
    role: ReadRole

    def AsArgs(self) -> list[str]:
        return [self.role.flag, self.path]

@dataclass
class InputManifest(Saveable):
    inputs: list[InputSpec]

    TABLE_COLUMNS = ["file", "role", "flag"]

    def __len__(self):
        return len(self.inputs)

    def __iter__(self):
        return iter(self.inputs)

    def OfRole(self, role: ReadRole) -> list[InputSpec]:
        return [i for i in self.inputs if i.role == role]

    def Counts(self) -> dict[ReadRole, int]:
        return {r: len(self.OfRole(r)) for r in ReadRole}

    def ToTable(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(i.path, i.role.value, i.role.flag) for i in self.inputs],
            columns=self.TABLE_COLUMNS,
        )

    def SaveTable(self, path: str|Path):
        path = Path(path)
        if not path.parent.exists(): os.makedirs(path.parent)
        self.ToTable().to_csv(path, sep="\t", index=False)

    @classmethod
    def Load(cls, path):
        with open(path) as j:
            raw = json.load(j)
            return cls([InputSpec(e["path"], ReadRole(e["role"])) for e in raw.get("inputs", [])])

@dataclass(frozen=True)
class RunConfig:
    dir: Path
    out_dir: Path
    megahit: Path
    min_count: int|None = None
    k_min: int|None = None
    k_max: int|None = None
    k_step: int|None = None
    k_list: list[int]|None = None
    min_contig_len: int|None = None
    memory: float|None = None
    threads: int|None = None
    extra_args: list[str] = field(default_factory=list)
    dry_run: bool = False
    debug: bool = False

    @classmethod
    def FieldNames(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def AsDict(self) -> dict[str, Any]:
        return {k: getattr(self, k) for k in self.FieldNames()}
