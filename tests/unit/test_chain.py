from attempt_failures.classify.chain import chain_contains, format_stacktrace, iter_chain
from attempt_failures.common.errors import RemoteActivityError, SizeLimitError


def _raise_chained():
    try:
        try:
            raise SizeLimitError("payload too large")
        except SizeLimitError as inner:
            raise ValueError("activity failed") from inner
    except ValueError as outer:
        raise RuntimeError("workflow failed") from outer


def test_chain_contains_finds_marker_deep_in_chain():
    try:
        _raise_chained()
    except RuntimeError as exc:
        assert chain_contains(exc, SizeLimitError)
        assert chain_contains(exc, ValueError)
        assert not chain_contains(exc, KeyError)


def test_chain_contains_matches_error_itself():
    assert chain_contains(SizeLimitError("x"), SizeLimitError)


def test_chain_contains_false_for_none_and_unmatched():
    assert not chain_contains(None, SizeLimitError)
    assert not chain_contains(ValueError("x"), SizeLimitError)


def test_chain_follows_implicit_context():
    try:
        try:
            raise SizeLimitError("inner")
        except SizeLimitError:
            raise ValueError("while handling")
    except ValueError as exc:
        assert chain_contains(exc, SizeLimitError)


def test_chain_respects_suppressed_context():
    try:
        try:
            raise SizeLimitError("inner")
        except SizeLimitError:
            raise ValueError("replaced") from None
    except ValueError as exc:
        assert not chain_contains(exc, SizeLimitError)


def test_iter_chain_terminates_on_cycle():
    first = ValueError("a")
    second = KeyError("b")
    first.__cause__ = second
    second.__cause__ = first

    assert list(iter_chain(first)) == [first, second]
    assert not chain_contains(first, SizeLimitError)


def test_format_stacktrace_includes_frames_and_causes():
    try:
        _raise_chained()
    except RuntimeError as exc:
        text = format_stacktrace(exc)

    assert "Traceback" in text
    assert "SizeLimitError: payload too large" in text
    assert "RuntimeError: workflow failed" in text


def test_format_stacktrace_prefers_remote_text():
    err = RemoteActivityError("boom", error_type="IOException", stacktrace="java.io.IOException: boom\n\tat X")
    assert format_stacktrace(err) == "java.io.IOException: boom\n\tat X"
