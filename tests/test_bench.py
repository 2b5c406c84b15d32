from mrprime.bench import (
    SingleResult, TestRecord, format_record, format_single, header_lines,
    plot_durations, run_full, run_single, write_results,
)


def test_header_lines():
    assert header_lines(10) == ["Tests done by the serial implementation.",
                                "Number of trials per test: 10"]
    assert header_lines(10, 8) == ["Tests done by the threaded implementation.",
                                   "Number of threads used: 8",
                                   "Number of trials per test: 10"]


def test_format_record():
    rec = TestRecord("Mersenne 15", 42, True)
    assert format_record(rec) == "Mersenne 15 is probable prime? true. Test duration: 42ms."
    rec = TestRecord("91", 0, False)
    assert format_record(rec) == "91 is probable prime? false. Test duration: 0ms."


def test_format_single():
    lines = format_single(SingleResult(12, True), 10)
    assert lines == ["Test performed 10 trials.",
                     "Duration of test: 12 milliseconds.",
                     "Number passed the test and is probably prime."]
    lines = format_single(SingleResult(3, False), 10, 4)
    assert lines[0] == "Test ran with 4 threads, performing 10 trials."
    assert lines[-1] == "Number is composite."


def test_run_single_both_engines():
    res = run_single(97, 10)
    assert res.probably_prime is True and res.duration_ms >= 0
    res = run_single(91, 20, workers=2, timeout_s=10)
    assert res.probably_prime is False


def test_run_full_and_write(tmp_path):
    seen = []
    records = run_full(3, workers=2, indices=range(5, 9), progress=lambda i, k: seen.append(k))
    assert seen == [5, 6, 7, 8]
    assert [r.label for r in records] == ["Mersenne 5", "Mersenne 6", "Mersenne 7", "Mersenne 8"]
    assert all(r.probably_prime for r in records)

    path = write_results(tmp_path / "out.txt", records, 3, 2)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[:3] == header_lines(3, 2)
    assert len(lines) == 3 + len(records)
    assert lines[3].startswith("Mersenne 5 is probable prime? true.")

    # overwrite, serial header
    write_results(path, records[:1], 3)
    assert path.read_text(encoding="utf-8").splitlines()[0] == "Tests done by the serial implementation."


def test_plot_durations(tmp_path):
    series = {
        "serial": [TestRecord("Mersenne 1", 1, True), TestRecord("Mersenne 2", 3, True)],
        "2 threads": [TestRecord("Mersenne 1", 2, True), TestRecord("Mersenne 2", 2, True)],
    }
    out = plot_durations(series, tmp_path / "plot.png")
    assert out.exists() and out.stat().st_size > 0
