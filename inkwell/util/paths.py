from pathlib import Path
from typing import Optional
import os

def resolve_path(path: str, base: Optional[Path] = None) -> Path:
    # allow paths relative to the config file and ~ expansion
    p = Path(os.path.expanduser(path))
    if not p.is_absolute():
        p = ((base or Path.cwd()) / p).resolve()
    return p

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)
