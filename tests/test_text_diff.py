import pytest

from revisionpack.compare import create_diff, split_lines, tokenize_hunks
from revisionpack.compare import text_diff as text_diff_module


def _kinds(result) -> list[str]:
    return [change.kind for hunk in result.hunks for change in hunk.changes]


def test_changed_text_produces_single_full_context_hunk() -> None:
    old_text = "one\ntwo\nthree\nfour"
    new_text = "one\n2\nthree\nfour\nfive"

    result = create_diff(old_text, new_text, "modify")

    assert result.type == "modify"
    assert len(result.hunks) == 1
    hunk = result.hunks[0]
    assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (1, 4, 1, 5)
    assert hunk.content == "@@ -1,4 +1,5 @@"
    assert _kinds(result) == ["normal", "delete", "insert", "normal", "normal", "insert"]

    deleted = hunk.changes[1]
    assert deleted.content == "two"
    assert deleted.old_line_number == 2
    assert deleted.new_line_number is None
    inserted = hunk.changes[2]
    assert inserted.content == "2"
    assert inserted.old_line_number is None
    assert inserted.new_line_number == 2
    context = hunk.changes[3]
    assert (context.old_line_number, context.new_line_number) == (3, 3)


def test_unchanged_text_produces_pseudo_hunk_of_context_lines() -> None:
    result = create_diff("alpha\nbeta\n", "alpha\nbeta\n", "modify")

    assert len(result.hunks) == 1
    hunk = result.hunks[0]
    assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (1, 3, 1, 3)
    assert [change.content for change in hunk.changes] == ["alpha", "beta", ""]
    assert all(change.is_normal for change in hunk.changes)
    assert [(c.old_line_number, c.new_line_number) for c in hunk.changes] == [(1, 1), (2, 2), (3, 3)]
    assert result.has_changes is False


def test_empty_texts_produce_no_hunks() -> None:
    result = create_diff("", "", "modify")

    assert result.hunks == ()
    assert result.tokens is not None
    assert result.tokens.old == ()
    assert result.tokens.new == ()


def test_added_text_uses_zero_start_for_empty_side() -> None:
    result = create_diff("", "first\nsecond", "add")

    assert result.type == "add"
    hunk = result.hunks[0]
    assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (0, 0, 1, 2)
    assert _kinds(result) == ["insert", "insert"]


def test_deleted_text_has_only_deletions() -> None:
    result = create_diff("gone", "", "delete")

    assert result.type == "delete"
    assert _kinds(result) == ["delete"]
    assert result.hunks[0].new_start == 0


@pytest.mark.parametrize(
    ("old_text", "new_text"),
    [
        ("a\nb\nc", "a\nc\nd"),
        ("", "x\n"),
        ("x\n", ""),
        ("same\n\nlines", "same\n\nlines"),
        ("line 1\nline 2\n", "line 0\nline 1\nline 2 changed\n"),
    ],
)
def test_hunk_sides_reconstruct_both_texts(old_text: str, new_text: str) -> None:
    result = create_diff(old_text, new_text)

    assert result.old_text() == old_text
    assert result.new_text() == new_text


def test_inline_tokens_mark_edits_in_paired_lines() -> None:
    result = create_diff("The quick fox\nstays", "The slow fox\nstays", "modify")

    assert result.tokens is not None
    old_line = result.tokens.old[0]
    new_line = result.tokens.new[0]
    assert "".join(token.value for token in old_line) == "The quick fox"
    assert "".join(token.value for token in new_line) == "The slow fox"
    assert any(token.kind == "edit" for token in old_line)
    assert any(token.kind == "edit" for token in new_line)
    assert [token.kind for token in result.tokens.old[1]] == ["text"]
    assert len(result.tokens.old) == 2
    assert len(result.tokens.new) == 2


def test_unpaired_lines_stay_plain_text_tokens() -> None:
    hunks = create_diff("a", "a\nb\nc", inline_tokens=False).hunks

    tokens = tokenize_hunks(hunks)

    assert len(tokens.old) == 1
    assert len(tokens.new) == 3
    assert [token.kind for line in tokens.new for token in line] == ["text", "text", "text"]


def test_inline_tokens_can_be_disabled() -> None:
    result = create_diff("a", "b", inline_tokens=False)

    assert result.tokens is None
    assert result.has_changes is True


def test_tokenization_failure_degrades_to_no_tokens(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(*_args, **_kwargs):
        raise RuntimeError("tokenizer-boom")

    monkeypatch.setattr(text_diff_module, "tokenize_hunks", explode)

    with pytest.warns(RuntimeWarning, match="RevisionKit degraded comparison"):
        result = create_diff("a", "b")

    assert result.tokens is None
    assert len(result.hunks) == 1

    errors: list[Exception] = []
    result = create_diff("a", "b", on_token_error=errors.append)
    assert result.tokens is None
    assert [str(error) for error in errors] == ["tokenizer-boom"]


def test_invalid_inputs_are_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported diff type"):
        create_diff("a", "b", "rename")  # type: ignore[arg-type]

    with pytest.raises(TypeError):
        create_diff(None, "b")  # type: ignore[arg-type]


def test_split_lines_treats_empty_text_as_no_lines() -> None:
    assert split_lines("") == []
    assert split_lines("a") == ["a"]
    assert split_lines("a\n") == ["a", ""]
