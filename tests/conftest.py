from types import SimpleNamespace

import pytest

from clusterdiff import DEFAULT_PARAMS


def make_records(starts_b, name_a='text1', name_b='text2', length=1):
    """Non-overlapping records in text A with the given starts in text B."""
    records = []
    for i, start_b in enumerate(starts_b):
        start_a = i * length
        records.append({
            f'start_{name_a}': start_a,
            f'end_{name_a}': start_a + length,
            f'start_{name_b}': start_b,
            f'end_{name_b}': start_b + length,
            'length': length,
            'differenz': start_b - start_a,
        })
    return records


@pytest.fixture
def make_args(tmp_path):
    def _make_args(**overrides):
        params = dict(DEFAULT_PARAMS)
        params.update(progress=False, output_dir=str(tmp_path / 'out'))
        params.update(overrides)
        return SimpleNamespace(**params)
    return _make_args


@pytest.fixture
def write_text(tmp_path):
    def _write_text(name, content):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write_text
