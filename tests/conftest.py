from unittest.mock import AsyncMock, patch

import pytest

from pivpn_client.pivpn.client import PiVPNClient


@pytest.fixture
def conf_dir(tmp_path):
    """Client conf directory with a profile for alice."""
    (tmp_path / "alice.conf").write_text("[Interface]\nPrivateKey = abc\n")
    return tmp_path


@pytest.fixture
def client(conf_dir):
    return PiVPNClient(conf_path=conf_dir)


@pytest.fixture
def run_command():
    """Replace the subprocess runner used by the client."""
    with patch("pivpn_client.pivpn.client.run_command", new_callable=AsyncMock) as mock:
        mock.return_value = ("", "")
        yield mock
