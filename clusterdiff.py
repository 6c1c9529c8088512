import logging
import os
import pathlib
import sys
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from operator import itemgetter
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

import fargv
import numpy as np
import tqdm

logger = logging.getLogger(__name__)

TSHEG = '་'
DEFAULT_SEPARATORS = [' ', ',', '.']
CLUSTER_SEPARATORS = [' ', ',', '.', '!', '?', ';', ':', '\n', '\t']
HASH_SEED = 5381
HASH_MASK = 0xFFFFFFFF


class ClusterDiffError(Exception):
    """Base class for all clusterdiff errors."""


class InvalidArgumentError(ClusterDiffError, ValueError):
    """Raised when a parameter is outside its accepted range."""


class ClusterValidationError(ClusterDiffError, ValueError):
    """Raised when cluster records or token sequences are malformed."""


def fast_str_to_numpy(s: str, dtype=np.uint16) -> np.ndarray:
    """Efficiently converts a string to a NumPy array of UTF-16 or UTF-32 code units."""
    if dtype == np.uint16:
        return np.frombuffer(s.encode('utf-16le'), dtype=dtype)
    elif dtype == np.uint32:
        return np.frombuffer(s.encode('utf-32le'), dtype=dtype)
    else:
        raise ValueError(f"Unsupported dtype for fast string conversion: {dtype}")


def hash_string(s: str) -> int:
    """djb2 over the UTF-16 code units of ``s``, truncated to an unsigned 32 bit integer.

    Different tokens may share a hash. Clusters built on hashes therefore treat
    colliding tokens as equal; use ``StringEquality`` when exact matches are needed.
    """
    h = HASH_SEED
    for unit in fast_str_to_numpy(s).tolist():
        h = (h * 33 + unit) & HASH_MASK
    return h


# --- Preprocessing ---

def replace_chars(text: str, chars_to_replace: Optional[Sequence[Tuple[str, str]]] = None) -> str:
    """Applies the (original, replacement) pairs one after the other, replacing all occurrences."""
    if not chars_to_replace:
        return text
    result = text
    for original, replacement in chars_to_replace:
        if not original:
            continue
        result = result.replace(original, replacement)
    return result


def _split(part: str, separator: str) -> List[str]:
    if separator == '':
        return list(part)
    return part.split(separator)


def tokenize(text: str, separators: Sequence[str] = DEFAULT_SEPARATORS, char_by_char: bool = False) -> List[str]:
    """Splits on every separator in turn, then strips tokens and drops the empty ones.

    The separators are applied one at a time, so their order matters when one
    separator occurs inside the pieces produced by another.
    """
    if char_by_char:
        return [c for c in text if c.strip()]

    result = [text]
    for separator in separators:
        result = [piece for part in result for piece in _split(part, separator)]

    return [token.strip() for token in result if token.strip()]


def frequency_map(tokens: Sequence[Union[str, int]]) -> Counter:
    return Counter(tokens)


def position_index(tokens: Sequence[Union[str, int]]) -> Dict[Union[str, int], List[int]]:
    index = defaultdict(list)
    for position, token in enumerate(tokens):
        index[token].append(position)
    return dict(index)


@dataclass(frozen=True)
class ProcessedText:
    """A tokenized text with a parallel sequence of token hashes."""
    original_text: str
    processed_text: str
    string_tokens: Tuple[str, ...]
    hash_tokens: Tuple[int, ...]
    token_to_hash: Dict[str, int] = field(repr=False, compare=False)
    hash_to_token: Dict[int, str] = field(repr=False, compare=False)

    @property
    def token_count(self) -> int:
        return len(self.string_tokens)

    def frequency_map(self, use_hashes: bool = True) -> Counter:
        return frequency_map(self.hash_tokens if use_hashes else self.string_tokens)

    def position_index(self, use_hashes: bool = True) -> Dict[Union[str, int], List[int]]:
        return position_index(self.hash_tokens if use_hashes else self.string_tokens)


def preprocess_text(
    text: str,
    separators: Sequence[str] = DEFAULT_SEPARATORS,
    chars_to_replace: Optional[Sequence[Tuple[str, str]]] = None,
    to_lower_case: bool = False,
    char_by_char: bool = False
) -> ProcessedText:
    """Lower-cases (optionally), replaces characters, tokenizes and hashes ``text``."""
    if not isinstance(text, str):
        text = str(text)

    processed = text.lower() if to_lower_case else text
    processed = replace_chars(processed, chars_to_replace)

    string_tokens = tuple(tokenize(processed, separators, char_by_char))
    hash_tokens = tuple(hash_string(token) for token in string_tokens)

    token_to_hash, hash_to_token = {}, {}
    for token, h in zip(string_tokens, hash_tokens):
        token_to_hash[token] = h
        hash_to_token[h] = token

    return ProcessedText(
        original_text=text,
        processed_text=processed,
        string_tokens=string_tokens,
        hash_tokens=hash_tokens,
        token_to_hash=token_to_hash,
        hash_to_token=hash_to_token,
    )


class TextPreprocessor:
    """Holds tokenizer settings so that both texts of a comparison are processed alike."""
    def __init__(
        self,
        separators: Sequence[str] = CLUSTER_SEPARATORS,
        chars_to_replace: Optional[Sequence[Tuple[str, str]]] = None,
        to_lower_case: bool = True,
        char_by_char: bool = False
    ):
        self.separators = list(separators)
        self.chars_to_replace = list(chars_to_replace or [])
        self.to_lower_case = to_lower_case
        self.char_by_char = char_by_char

    def process(self, text: str) -> ProcessedText:
        return preprocess_text(text, self.separators, self.chars_to_replace, self.to_lower_case, self.char_by_char)

    def process_pair(self, text_a: str, text_b: str) -> Tuple[ProcessedText, ProcessedText]:
        return self.process(text_a), self.process(text_b)


# --- Token equality ---

class TokenEquality(ABC):
    """Chooses the per-token keys that the cluster search compares."""
    @abstractmethod
    def keys(self, processed: ProcessedText) -> Sequence: pass


class HashEquality(TokenEquality):
    """Compares 32 bit token hashes. Fast, but colliding tokens count as equal."""
    def keys(self, processed: ProcessedText) -> Sequence[int]:
        return processed.hash_tokens


class StringEquality(TokenEquality):
    """Compares the token strings themselves."""
    def keys(self, processed: ProcessedText) -> Sequence[str]:
        return processed.string_tokens


HASH_EQUALITY = HashEquality()
STRING_EQUALITY = StringEquality()


# --- Cluster search ---

class ClusterCandidate(NamedTuple):
    start_a: int
    end_a: int
    start_b: int
    end_b: int
    length: int


class Cluster:
    """All matches found for one start position in text A."""
    def __init__(self, position_a: int, name_a: str = 'text_a', name_b: str = 'text_b'):
        self.pos_a = position_a
        self.column_names = (f'start_{name_a}', f'end_{name_a}', f'start_{name_b}', f'end_{name_b}', 'length')
        self.clusters: List[ClusterCandidate] = []
        self.final_cluster: Optional[ClusterCandidate] = None

    def append_cluster(self, pos_b: int, cluster_length: int):
        self.clusters.append(ClusterCandidate(
            self.pos_a, self.pos_a + cluster_length, pos_b, pos_b + cluster_length, cluster_length))

    def pick_final_cluster(self):
        """Keeps the longest candidate; on equal lengths the earlier one wins."""
        if not self.clusters:
            return
        best = self.clusters[0]
        for candidate in self.clusters[1:]:
            if candidate.length > best.length:
                best = candidate
        self.final_cluster = best

    def as_record(self) -> Dict[str, int]:
        if self.final_cluster is None:
            raise ClusterValidationError(f"No final cluster selected for position {self.pos_a}")
        record = dict(zip(self.column_names, self.final_cluster))
        record['differenz'] = self.final_cluster.start_b - self.final_cluster.start_a
        return record


def cluster_search(a: Sequence, b: Sequence, min_length: int, progress: bool = False) -> List[Tuple[int, int, int]]:
    """Greedy scan for runs of equal elements shared by ``a`` and ``b``.

    For every position of ``a`` not already covered by an accepted run, ``b`` is
    scanned from the left and the first run of at least ``min_length`` elements
    is accepted, even if a longer one starts further right.

    Returns a list of ``(start_a, start_b, length)`` tuples ordered by ``start_a``.
    """
    if min_length < 1:
        raise InvalidArgumentError(f"min_length must be at least 1, got {min_length}")

    len_a, len_b = len(a), len(b)
    skips = 0
    clusters = []

    for i in tqdm.tqdm(range(len_a), desc="Searching clusters", disable=not progress):
        if skips > 0:
            skips -= 1
            continue

        for j in range(len_b):
            if a[i] != b[j]:
                continue
            h, k, length = i, j, 1
            while h + 1 < len_a and k + 1 < len_b and a[h + 1] == b[k + 1]:
                h += 1
                k += 1
                length += 1
            if length >= min_length:
                clusters.append((i, j, length))
                skips = length - 1
                break

    return clusters


def group_clusters(raw_clusters: Sequence[Tuple[int, int, int]], name_a: str = 'text_a', name_b: str = 'text_b') -> List[Cluster]:
    """Collects raw matches into one ``Cluster`` per start position in text A."""
    groups: List[Cluster] = []
    for start_a, start_b, length in raw_clusters:
        if not groups or start_a > groups[-1].pos_a:
            if groups:
                groups[-1].pick_final_cluster()
            groups.append(Cluster(start_a, name_a, name_b))
        groups[-1].append_cluster(start_b, length)
    if groups:
        groups[-1].pick_final_cluster()
    return groups


def find_clusters(
    processed_a: ProcessedText,
    processed_b: ProcessedText,
    min_length: int = 10,
    name_a: str = 'text_a',
    name_b: str = 'text_b',
    equality: TokenEquality = HASH_EQUALITY,
    progress: bool = False
) -> List[Dict[str, int]]:
    """Finds the clusters shared by two processed texts.

    Each record carries ``start_<name_a>``, ``end_<name_a>``, ``start_<name_b>``,
    ``end_<name_b>``, ``length`` and ``differenz`` (start in B minus start in A).
    """
    if min_length < 1:
        raise InvalidArgumentError(f"min_length must be at least 1, got {min_length}")

    a_tokens = equality.keys(processed_a)
    b_tokens = equality.keys(processed_b)
    if len(a_tokens) == 0 or len(b_tokens) == 0:
        logger.warning("One or both token sequences are empty")
        return []

    logger.info("Length of sequences: %d and %d items", len(a_tokens), len(b_tokens))
    logger.info("Using minimum cluster length: %d", min_length)

    raw_clusters = cluster_search(a_tokens, b_tokens, min_length, progress=progress)
    if not raw_clusters:
        logger.info("No clusters found that meet the minimum length requirement")
        return []

    records = [cluster.as_record() for cluster in group_clusters(raw_clusters, name_a, name_b)]
    logger.info("Found %d clusters", len(records))
    return records


# --- Cluster cleaning ---

def is_column_ascending(records: Sequence[Dict[str, int]], key: str = 'start_text2') -> bool:
    if len(records) <= 1:
        return True
    values = np.array([record[key] for record in records])
    return bool(np.all(np.diff(values) >= 0))


def remove_overlapping_clusters(
    records: Sequence[Dict[str, int]],
    start_key_a: str = 'start_text1',
    end_key_a: str = 'end_text1',
    verbose: bool = False
) -> List[Dict[str, int]]:
    """Drops records whose span in text A starts before the previous record ends.

    The previous end is taken from every record, including dropped ones, so a
    dropped record can still push out the record after it.
    """
    ordered = sorted(records, key=itemgetter(start_key_a))
    filtered = []
    prev_end_a = None
    for record in ordered:
        if prev_end_a is None or record[start_key_a] >= prev_end_a:
            filtered.append(record)
        prev_end_a = record[end_key_a]

    if verbose:
        logger.info("Initial clusters: %d", len(ordered))
        logger.info("Overlapping clusters removed: %d", len(ordered) - len(filtered))
        logger.info("Remaining clusters: %d", len(filtered))
    return filtered


def remove_outlying_clusters(records: Sequence[Dict[str, int]], start_key_b: str = 'start_text2') -> List[Dict[str, int]]:
    """Removes clusters whose start in text B jumps against the local order.

    Both rows around every backward step are flagged. Each run of flagged rows is
    resolved by widening an offset around the step until one side fits between
    its neighbours again; that side's block is dropped. A flagged tail is always
    dropped, and consecutive rows with the same start in B are reduced to the first.
    """
    n = len(records)
    if n <= 1:
        return list(records)

    starts = np.array([record[start_key_b] for record in records], dtype=np.int64)
    flags = np.zeros(n, dtype=bool)
    backward = np.flatnonzero(np.diff(starts) < 0) + 1
    flags[backward] = True
    flags[backward - 1] = True

    def left(idx: int) -> float:
        # index -1 sits before the first record
        return starts[idx] if idx >= 0 else -np.inf

    remove = np.zeros(n, dtype=bool)
    for i in range(1, n):
        if i + 1 == n and flags[i]:
            remove[i] = True
            continue
        if not (flags[i] and flags[i - 1]):
            continue

        offset = 1
        while i - offset > 0 and i + offset + 1 < n:
            if starts[i] > starts[i - offset - 1] or starts[i - 1] < starts[i + offset]:
                break
            offset += 1

        if starts[i - 1] <= starts[i + offset]:
            remove[i:i + offset] = True
        elif starts[i] > left(i - offset - 1):
            remove[i - offset:i] = True
        else:
            logger.debug("Problem at index %d", i)

    for i in range(n - 1, 0, -1):
        if not flags[i]:
            break
        remove[i] = True

    logger.debug("Removing indices: %s", np.flatnonzero(remove).tolist())
    kept = [record for record, drop in zip(records, remove) if not drop]

    result = [record for idx, record in enumerate(kept)
              if idx == 0 or record[start_key_b] != kept[idx - 1][start_key_b]]
    logger.debug("%d clusters removed", n - len(result))
    return result


def clean_cluster_table(
    records: Sequence[Dict[str, int]],
    start_key_a: str = 'start_text1',
    end_key_a: str = 'end_text1',
    start_key_b: str = 'start_text2',
    single_pass: bool = True
) -> List[Dict[str, int]]:
    """Alternates overlap and outlier removal until ``start_key_b`` ascends.

    Stops early after one round when ``single_pass`` is set, or when a round
    changes nothing. The result is not guaranteed to be ascending; check it with
    ``is_column_ascending``.
    """
    loops = 0
    current = list(records)
    while not is_column_ascending(current, start_key_b):
        snapshot = list(current)
        current = remove_overlapping_clusters(current, start_key_a, end_key_a)
        current = remove_outlying_clusters(current, start_key_b)
        if single_pass:
            break
        if current == snapshot:
            break
        loops += 1

    logger.info("Only ascending? %s after %d iterations", is_column_ascending(current, start_key_b), loops)
    return current


# --- Text comparison ---

@dataclass(frozen=True)
class ComparisonSegment:
    """One row of the side-by-side comparison: a shared cluster or the unique text between clusters."""
    tag: str
    pos_a: int
    length_a: int
    content_a: str
    pos_b: int
    length_b: int
    content_b: str
    cluster_length: int = 0
    cluster_content: str = ''

    @property
    def is_cluster(self) -> bool:
        return self.tag == 'cluster'

    @property
    def span_a(self) -> Tuple[int, int]:
        return self.pos_a, self.pos_a + (self.cluster_length if self.is_cluster else self.length_a)

    @property
    def span_b(self) -> Tuple[int, int]:
        return self.pos_b, self.pos_b + (self.cluster_length if self.is_cluster else self.length_b)

    def as_row(self, name_a: str = 'text1', name_b: str = 'text2') -> Dict[str, Union[str, int]]:
        return {
            'tag': self.tag,
            f'Pos_{name_a}': self.pos_a,
            f'Length_{name_a}': self.length_a,
            name_a: self.content_a,
            f'Pos_{name_b}': self.pos_b,
            f'Length_{name_b}': self.length_b,
            name_b: self.content_b,
            'Length_Cluster': self.cluster_length,
            'Cluster': self.cluster_content,
        }


def _unique_segment(a, b, a_start, a_end, b_start, b_end, joiner) -> ComparisonSegment:
    return ComparisonSegment(
        tag='unique',
        pos_a=a_start, length_a=a_end - a_start, content_a=joiner.join(a[a_start:a_end]),
        pos_b=b_start, length_b=b_end - b_start, content_b=joiner.join(b[b_start:b_end]),
    )


def compare_texts(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    records: Sequence[Dict[str, int]] = (),
    name_a: str = 'text1',
    name_b: str = 'text2',
    joiner: str = TSHEG,
    check_order: bool = False
) -> List[ComparisonSegment]:
    """Splits both token sequences into alternating unique and cluster segments.

    ``records`` must ascend in ``start_<name_b>``; otherwise the segments no
    longer partition text B. Pass ``check_order=True`` to raise instead.
    """
    if (isinstance(tokens_a, str) or not isinstance(tokens_a, Sequence)
            or isinstance(tokens_b, str) or not isinstance(tokens_b, Sequence)):
        raise ClusterValidationError("Invalid inputs for compare_texts: tokens_a and tokens_b must be token sequences")
    if not isinstance(records, Sequence):
        raise ClusterValidationError("Invalid inputs for compare_texts: records must be a sequence")

    a, b = list(tokens_a), list(tokens_b)
    if not records:
        return [_unique_segment(a, b, 0, len(a), 0, len(b), joiner)]

    start_a_key, end_a_key = f'start_{name_a}', f'end_{name_a}'
    start_b_key, end_b_key = f'start_{name_b}', f'end_{name_b}'
    required_keys = (start_a_key, end_a_key, start_b_key, end_b_key, 'length')
    for idx, record in enumerate(records):
        missing = [key for key in required_keys if key not in record]
        if missing:
            raise ClusterValidationError(f"Cluster record {idx} is missing the properties {missing}")
    if check_order and not is_column_ascending(records, start_b_key):
        raise ClusterValidationError(f"Cluster records are not ascending in '{start_b_key}'")

    segments = []
    a_start, b_start = 0, 0
    for record in records:
        start_a, end_a = record[start_a_key], record[end_a_key]
        start_b, end_b = record[start_b_key], record[end_b_key]

        if start_a > a_start or start_b > b_start:
            segments.append(_unique_segment(a, b, a_start, start_a, b_start, start_b, joiner))

        segments.append(ComparisonSegment(
            tag='cluster',
            pos_a=start_a, length_a=0, content_a='',
            pos_b=start_b, length_b=0, content_b='',
            cluster_length=record['length'],
            cluster_content=joiner.join(a[start_a:end_a]),
        ))
        a_start, b_start = end_a, end_b

    if a_start < len(a) or b_start < len(b):
        segments.append(_unique_segment(a, b, a_start, len(a), b_start, len(b), joiner))

    return segments


# --- Pipeline ---

DEFAULT_PARAMS = {
    'text1': '',
    'text2': '',
    'name1': 'text1',
    'name2': 'text2',
    'min_length': 5,
    'separators': ' ,.!?;:\\n\\t',
    'char_replacements': '',
    'lowercase': True,
    'char_by_char': False,
    'exact_tokens': False,
    'clean': True,
    'single_pass': False,
    'joiner': TSHEG,
    'output_dir': '.',
    'bubble_chart': True,
    'progress': True,
    'verbose': False,
}

_ESCAPES = {'\\n': '\n', '\\t': '\t', '\\r': '\r', '\\\\': '\\'}


def parse_separators(spec: str) -> List[str]:
    """Every character is a separator; ``\\n``, ``\\t`` and ``\\r`` escapes are understood."""
    separators = []
    i = 0
    while i < len(spec):
        pair = spec[i:i + 2]
        if pair in _ESCAPES:
            char = _ESCAPES[pair]
            i += 2
        else:
            char = spec[i]
            i += 1
        if char not in separators:
            separators.append(char)
    return separators


def parse_char_replacements(spec: str) -> List[Tuple[str, str]]:
    """Parses ``"ſ=s|æ=ae"`` into ``[('ſ', 's'), ('æ', 'ae')]``."""
    pairs = []
    for item in spec.split('|'):
        if not item:
            continue
        if '=' not in item:
            raise InvalidArgumentError(f"Invalid character replacement '{item}', expected 'from=to'")
        original, replacement = item.split('=', 1)
        if not original:
            raise InvalidArgumentError(f"Invalid character replacement '{item}', the original must not be empty")
        pairs.append((original, replacement))
    return pairs


class ClusterDiff:
    """Cluster comparison pipeline for two text files."""
    def __init__(self, args=None, params: Optional[Dict] = None, argv: Optional[List[str]] = None):
        if args is None:
            args, _ = fargv.fargv(dict(params or DEFAULT_PARAMS), argv=argv)
        self.args = args

        self.preprocessor = TextPreprocessor(
            separators=parse_separators(self.args.separators),
            chars_to_replace=parse_char_replacements(self.args.char_replacements),
            to_lower_case=self.args.lowercase,
            char_by_char=self.args.char_by_char,
        )
        self.equality = STRING_EQUALITY if self.args.exact_tokens else HASH_EQUALITY

        self.text1: str = ''
        self.text2: str = ''
        self.processed1: Optional[ProcessedText] = None
        self.processed2: Optional[ProcessedText] = None
        self.clusters: List[Dict[str, int]] = []
        self.is_ascending = True

    @property
    def keys(self) -> Tuple[str, str, str]:
        return f'start_{self.args.name1}', f'end_{self.args.name1}', f'start_{self.args.name2}'

    def _read_text_file(self, path_str: str) -> str:
        if not path_str:
            raise InvalidArgumentError("Both 'text1' and 'text2' must be given")
        path = pathlib.Path(path_str)
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def load_texts(self):
        self.text1 = self._read_text_file(self.args.text1)
        self.text2 = self._read_text_file(self.args.text2)
        print(f"Loaded {len(self.text1)} and {len(self.text2)} characters")

    def process_texts(self):
        self.processed1, self.processed2 = self.preprocessor.process_pair(self.text1, self.text2)
        print(f"Tokenized texts into {self.processed1.token_count} and {self.processed2.token_count} tokens")

    def find_clusters(self) -> List[Dict[str, int]]:
        if self.processed1 is None or self.processed2 is None:
            raise RuntimeError("Texts are not processed. Run process_texts first.")
        self.clusters = find_clusters(
            self.processed1, self.processed2, self.args.min_length,
            self.args.name1, self.args.name2, equality=self.equality, progress=self.args.progress)
        self.is_ascending = is_column_ascending(self.clusters, self.keys[2])
        print(f"Found {len(self.clusters)} clusters, ascending in {self.args.name2}: {self.is_ascending}")
        return self.clusters

    def clean_clusters(self) -> List[Dict[str, int]]:
        if self.is_ascending or not self.args.clean:
            return self.clusters
        before = len(self.clusters)
        start_a, end_a, start_b = self.keys
        self.clusters = clean_cluster_table(self.clusters, start_a, end_a, start_b, self.args.single_pass)
        self.is_ascending = is_column_ascending(self.clusters, start_b)
        print(f"Cleaning removed {before - len(self.clusters)} clusters, ascending now: {self.is_ascending}")
        return self.clusters

    def compare(self) -> List[ComparisonSegment]:
        if not self.is_ascending:
            raise ClusterValidationError(
                f"Clusters are not ascending in {self.args.name2}; clean them before comparing the texts")
        return compare_texts(
            self.processed1.string_tokens, self.processed2.string_tokens, self.clusters,
            self.args.name1, self.args.name2, joiner=self.args.joiner)

    def run(self) -> Optional[List[ComparisonSegment]]:
        from clusterdiff_report import ClusterVisualizer

        self.load_texts()
        self.process_texts()
        self.find_clusters()
        self.clean_clusters()

        output_dir = pathlib.Path(self.args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        ClusterVisualizer.write_cluster_csv(
            self.clusters, self.processed1, output_dir / 'cluster_results.csv', self.args.name1, self.args.name2)
        if self.args.bubble_chart and self.clusters:
            ClusterVisualizer.plot_cluster_bubbles(
                self.clusters, output_dir / 'cluster_bubbles.html', self.args.name1, self.args.name2)

        if not self.is_ascending:
            print(f"Clusters are not ascending in {self.args.name2}. Skipping the text comparison.")
            return None

        segments = self.compare()
        ClusterVisualizer.write_comparison_csv(
            segments, output_dir / 'comparison_results.csv', self.args.name1, self.args.name2)
        ClusterVisualizer.generate_comparison_html(
            segments, output_dir / 'comparison.html', self.args.name1, self.args.name2)
        return segments


def main(argv=None) -> int:
    print("--- Cluster comparison of two texts ---")
    print("For command-line options, run with the -h flag.")

    if argv is not None:
        argv = [sys.argv[0]] + list(argv)
    try:
        analyzer = ClusterDiff(argv=argv)
        logging.basicConfig(
            level=logging.DEBUG if analyzer.args.verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        segments = analyzer.run()
        if segments is not None:
            print(f"Generated {len(segments)} comparison segments in {os.path.abspath(analyzer.args.output_dir)}")
    except (ClusterDiffError, OSError) as e:
        print(f"\nAn error occurred: {e}")
        return 1
    finally:
        print("\n--- Execution Finished ---")
    return 0


if __name__ == '__main__':
    sys.exit(main())
