from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.error
import urllib.request

import certifi

logger = logging.getLogger(__name__)


HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)
DEFAULT_MODEL_PATH = "models/hand_landmarker.task"


def _remove_partial(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def _download_urllib(url: str, model_path: str, timeout_s: int) -> None:
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
    Make sure the Tasks hand landmarker model exists at `model_path`.

    Missing models are fetched from the MediaPipe model bucket, first with
    urllib and then with `curl`, which often works where the Python
    certificate store is broken.
    """

    if os.path.exists(model_path):
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    logger.info("Downloading hand landmarker model to %s", model_path)

    try:
        _download_urllib(url, model_path, timeout_s)
        return model_path
    except (urllib.error.URLError, OSError) as e:
        logger.warning("urllib download failed (%s), retrying with curl", e)
        _remove_partial(model_path)
        first_error = e

    try:
        proc = _download_curl(url, model_path)
    except FileNotFoundError:
        proc = None

    if proc is not None and proc.returncode == 0 and os.path.exists(model_path) and os.path.getsize(model_path) > 0:
        return model_path
    _remove_partial(model_path)

    curl_err = ""
    if proc is not None:
        curl_err = f"\ncurl stderr:\n{proc.stderr.strip()}\n"
    raise RuntimeError(
        "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
        f"Expected model at: {model_path}\n"
        f"URL: {url}\n\n"
        "Download it manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{url}"\n'
        f"{curl_err}"
    ) from first_error
