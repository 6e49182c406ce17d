import threading

import pytest

from app.utils.id_generator import IdGenerator, to_base36


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    with pytest.raises(ValueError):
        to_base36(-1)


def test_ids_are_non_empty_and_unique():
    generator = IdGenerator()
    ids = [generator.generate() for _ in range(5000)]
    assert all(ids)
    assert len(set(ids)) == len(ids)


def test_ids_are_unique_across_threads():
    generator = IdGenerator()
    results = []
    lock = threading.Lock()

    def worker():
        local = [generator.generate() for _ in range(500)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 4000
    assert len(set(results)) == 4000


def test_ids_use_lowercase_base36_alphabet():
    book_id = IdGenerator().generate()
    assert book_id.isalnum()
    assert book_id == book_id.lower()
