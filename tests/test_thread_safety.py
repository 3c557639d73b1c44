"""Concurrent parsing with different configurations.

Configuration travels through a ContextVar, so threads parsing with
different Markdown instances must never see each other's settings.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from hojas import FeatureRegistry, Markdown, to_json

_SOURCE = """\
# Heading

| a | b |
|---|---|
| 1 | 2 |

Some ~~struck~~ text with :rocket: and a note[^n].

[^n]: The note.
"""

_CONFIGS = {
    "all": Markdown(),
    "none": Markdown(features=FeatureRegistry.none()),
    "no-table": Markdown(features=FeatureRegistry.all().disable("table")),
    "basic": Markdown(features=["heading", "bold", "italic"]),
    "shallow": Markdown(max_nesting_depth=2),
}


class TestConcurrentParsing:
    def test_instances_do_not_interfere(self) -> None:
        expected = {name: to_json(md.parse(_SOURCE)) for name, md in _CONFIGS.items()}
        jobs = [name for name in _CONFIGS for _ in range(20)]

        def run(name: str) -> tuple[str, str]:
            return name, to_json(_CONFIGS[name].parse(_SOURCE))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(run, jobs))

        for name, output in results:
            assert output == expected[name], name

    def test_shared_instance(self) -> None:
        md = _CONFIGS["all"]
        expected = to_json(md.parse(_SOURCE))
        errors: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(10):
                output = to_json(md.parse(_SOURCE))
                if output != expected:
                    with lock:
                        errors.append(output)

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10.0)

        assert not errors

    def test_parse_many_in_threads(self) -> None:
        sources = [f"# Doc {i}\n\ntext" for i in range(30)]

        def run(md: Markdown) -> list[str | None]:
            return [doc.headings[0].id if doc.headings else None for doc in md.parse_many(sources)]

        with ThreadPoolExecutor(max_workers=2) as pool:
            with_ids, without_ids = pool.map(run, [_CONFIGS["all"], _CONFIGS["none"]])

        assert with_ids == [f"doc-{i}" for i in range(30)]
        assert without_ids == [None] * 30
