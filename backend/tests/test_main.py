from unittest.mock import patch

import pytest

from main import build_parser, main
from modules.auth.service import get_session_manager

RESET_URL = (
    "http://localhost:5173/reset-password"
    "#access_token=abc&refresh_token=def&type=recovery"
)


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path):
    """Simulated backend with no delays and a throwaway session file."""
    monkeypatch.setenv("IDENTITY_BACKEND", "simulated")
    monkeypatch.setenv("SIMULATED_AUTH_DELAY", "0")
    monkeypatch.setenv("ID_VERIFICATION_DELAY", "0")
    monkeypatch.setenv("SESSION_STORAGE_PATH", str(tmp_path / "session.json"))


class TestParser:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_verify_id_media_type(self):
        args = build_parser().parse_args(["verify-id", "card.bin", "--media-type", "image/png"])
        assert args.media_type == "image/png"


class TestCommands:
    def test_login_then_whoami_then_logout(self, capsys):
        with patch("main.Prompt.ask", return_value="secret"):
            assert main(["login", "jane@college.edu"]) == 0
        assert get_session_manager().session.identity.email == "jane@college.edu"

        assert main(["whoami"]) == 0
        assert "jane@college.edu" in capsys.readouterr().out

        assert main(["logout"]) == 0
        assert get_session_manager().session.identity is None

    def test_login_reports_unwritable_session_file(self, monkeypatch, tmp_path, capsys):
        """A session file that can't be written should be an error, not a traceback."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        monkeypatch.setenv("SESSION_STORAGE_PATH", str(blocker / "session.json"))

        with patch("main.Prompt.ask", return_value="secret"):
            assert main(["login", "jane@college.edu"]) == 1

        assert "Could not save" in capsys.readouterr().out
        assert get_session_manager().session.identity is None

    def test_forgot_password_requires_email(self):
        assert main(["forgot-password", "  "]) == 1

    def test_reset_debug(self, capsys):
        assert main(["reset-debug", RESET_URL]) == 0
        assert "fragment" in capsys.readouterr().out

    def test_reset_password_invalid_link(self):
        assert main(["reset-password", "http://localhost:5173/reset-password"]) == 1

    def test_reset_password_retries_until_accepted(self):
        answers = ["short", "short", "longenough", "longenough"]
        with patch("main.Prompt.ask", side_effect=answers) as ask:
            assert main(["reset-password", RESET_URL]) == 0
        assert ask.call_count == 4

    def test_verify_id_large_image(self, tmp_path):
        card = tmp_path / "card.png"
        card.write_bytes(b"\x89PNG" + b"\x00" * 40_000)
        assert main(["verify-id", str(card)]) == 0

    def test_verify_id_small_image_fails(self, tmp_path):
        card = tmp_path / "card.jpg"
        card.write_bytes(b"\xff\xd8" + b"\x00" * 100)
        assert main(["verify-id", str(card)]) == 1

    def test_verify_id_rejects_non_image(self, tmp_path):
        doc = tmp_path / "card.pdf"
        doc.write_bytes(b"%PDF")
        assert main(["verify-id", str(doc)]) == 1

    def test_verify_id_missing_file(self, tmp_path):
        assert main(["verify-id", str(tmp_path / "nope.png")]) == 1
