from .letterset import LettersetIndex, build_index, letterset, letters_of, is_disjoint_packing
from .validation import InvalidWord, check_word, is_valid_word
from .partition import PartitionKeyer
from .constraints import filter_candidates
from .triples import TripleSet, enumerate_triples
from .joiner import bucket_by_key, join_triples, pack_hextuples
from .packing import Solution, WordSolution
from .realizer import realize, count_realizations

__all__ = [
    "LettersetIndex", "build_index", "letterset", "letters_of", "is_disjoint_packing",
    "InvalidWord", "check_word", "is_valid_word",
    "PartitionKeyer",
    "filter_candidates",
    "TripleSet", "enumerate_triples",
    "bucket_by_key", "join_triples", "pack_hextuples",
    "Solution", "WordSolution",
    "realize", "count_realizations",
]
