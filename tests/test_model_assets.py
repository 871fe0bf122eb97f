from __future__ import annotations

import subprocess
import urllib.error

import pytest

from shapetrail_hand import model_assets


def test_existing_model_is_returned(tmp_path):
    path = tmp_path / "hand_landmarker.task"
    path.write_bytes(b"model")
    assert model_assets.ensure_hand_landmarker_task(str(path)) == str(path)


def test_falls_back_to_curl(tmp_path, monkeypatch):
    path = tmp_path / "models" / "hand_landmarker.task"

    def fail(url, model_path, timeout_s):
        raise urllib.error.URLError("CERTIFICATE_VERIFY_FAILED")

    def fake_curl(url, model_path):
        with open(model_path, "wb") as f:
            f.write(b"model")
        return subprocess.CompletedProcess(["curl"], 0, "", "")

    monkeypatch.setattr(model_assets, "_download_urllib", fail)
    monkeypatch.setattr(model_assets, "_download_curl", fake_curl)
    assert model_assets.ensure_hand_landmarker_task(str(path)) == str(path)
    assert path.read_bytes() == b"model"


def test_raises_when_every_download_fails(tmp_path, monkeypatch):
    path = tmp_path / "hand_landmarker.task"

    def fail(url, model_path, timeout_s):
        with open(model_path, "wb") as f:
            f.write(b"partial")
        raise urllib.error.URLError("offline")

    monkeypatch.setattr(model_assets, "_download_urllib", fail)
    monkeypatch.setattr(
        model_assets, "_download_curl", lambda url, model_path: subprocess.CompletedProcess(["curl"], 6, "", "no host")
    )
    with pytest.raises(RuntimeError, match="auto-download failed"):
        model_assets.ensure_hand_landmarker_task(str(path))
    assert not path.exists()
