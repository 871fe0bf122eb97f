from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.request

import certifi

logger = logging.getLogger(__name__)


HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)


def _remove_partial(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def _download_urllib(url: str, model_path: str, timeout_s: int) -> None:
    # certifi avoids CERTIFICATE_VERIFY_FAILED on Python builds without a system CA store.
    ctx = ssl.create_default_context(cafile=certifi.where())
    with urllib.request.urlopen(url, context=ctx, timeout=timeout_s) as r, open(model_path, "wb") as f:
        f.write(r.read())


def _download_curl(url: str, model_path: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["curl", "-L", "-o", model_path, url],
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )


def ensure_hand_landmarker_task(model_path: str, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30) -> str:
    """
    Ensure `hand_landmarker.task` exists at `model_path`.

    If missing, downloads it from the MediaPipe model bucket, falling back to
    `curl` when the Python download fails.
    """

    if os.path.exists(model_path):
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    logger.info("downloading hand landmarker model to %s", model_path)

    try:
        _download_urllib(url, model_path, timeout_s)
        return model_path
    except OSError as e:
        logger.warning("python download failed (%s), retrying with curl", e)
        _remove_partial(model_path)
        first_error = e

    curl_err = ""
    try:
        proc = _download_curl(url, model_path)
        if proc.returncode == 0 and os.path.exists(model_path) and os.path.getsize(model_path) > 0:
            return model_path
        curl_err = proc.stderr.strip()
    except FileNotFoundError:
        curl_err = "curl is not installed"

    _remove_partial(model_path)
    raise RuntimeError(
        "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
        f"Expected model at: {model_path}\n"
        f"URL: {url}\n\n"
        "Download it manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{url}"\n\n'
        f"curl: {curl_err}"
    ) from first_error
