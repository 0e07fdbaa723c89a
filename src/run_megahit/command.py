from .discovery import PairMates
from .models import InputManifest, ReadRole, RunConfig

def _fmt(v):
    if isinstance(v, float) and v.is_integer(): return str(int(v))
    return str(v)

def TuningArgs(config: RunConfig) -> list[str]:
    options = [("--min-count", config.min_count)]
    # --k-list overrides the min/max/step triple, megahit rejects both together
    if config.k_list:
        options.append(("--k-list", ",".join(str(k) for k in config.k_list)))
    else:
        options += [
            ("--k-min", config.k_min),
            ("--k-max", config.k_max),
            ("--k-step", config.k_step),
        ]
    options += [
        ("--min-contig-len", config.min_contig_len),
        ("--memory", config.memory),
        ("--num-cpu-threads", config.threads),
    ]

    args = []
    for flag, val in options:
        if val is None: continue
        args += [flag, _fmt(val)]
    return args

def BuildCommand(config: RunConfig, inputs: InputManifest) -> list[str]:
    cmd = [str(config.megahit)]+TuningArgs(config)+["-o", str(config.out_dir)]
    # megahit zips -1 and -2 by position, a mate without its partner would pair with the wrong file
    _, unpaired = PairMates(inputs)
    unpaired = set(unpaired)
    for spec in inputs:
        if spec.path in unpaired:
            cmd += [ReadRole.SINGLE.flag, spec.path]
        else:
            cmd += spec.AsArgs()
    return cmd+list(config.extra_args)
