import pytest

SAMPLE = """\
// sample program
whole x -> 10;
fraction ratio -> 1 / 3;
truth ready -> yes;
character grade -> 'a';
/* block
   comment */
if (x > 5) {
    whole y -> x + 1;
    say y;
} else if (ready) {
    say "ready";
} else {
    say 0;
}
"""


@pytest.fixture
def sample_source() -> str:
    return SAMPLE


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "code.kh"
    path.write_text(SAMPLE, encoding="utf-8")
    return path
