import importlib.util
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from daietsu_api import ClientConfig, Result

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "create_payment.py"


@pytest.fixture
def example(monkeypatch):
    spec = importlib.util.spec_from_file_location("create_payment_example", EXAMPLE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    client = MagicMock()
    monkeypatch.setattr(module, "create_client", lambda **kwargs: client)
    monkeypatch.setattr(
        module, "load_client_config", lambda **kwargs: ClientConfig("cid", "cs")
    )
    monkeypatch.setattr(sys, "argv", ["create_payment.py", "--token", "tok"])
    return module, client


def test_string_result_skips_lookup(example, capsys):
    module, client = example
    client.create_payment.return_value = Result.success("https://pay.daietsu.app/p_1")

    assert module.main() == 0
    client.get_payment.assert_not_called()
    assert "https://pay.daietsu.app/p_1" in capsys.readouterr().out


def test_created_payment_is_fetched(example):
    module, client = example
    client.create_payment.return_value = Result.success({"id": "p_1"})
    client.get_payment.return_value = Result.success({"id": "p_1", "status": "PENDING"})

    assert module.main() == 0
    client.get_payment.assert_called_once_with("tok", "p_1")
