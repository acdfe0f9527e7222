from .core import pack_for_answer, iter_packings, pack_all, realize_all, solve, build_keyer
from .io import write_csv, write_jsonl, write_solutions, write_manifest

__all__ = [
    "pack_for_answer", "iter_packings", "pack_all", "realize_all", "solve", "build_keyer",
    "write_csv", "write_jsonl", "write_solutions", "write_manifest",
]
