from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from shapetrail_hand.app import ShapeTrailApp  # noqa: E402
from shapetrail_hand.detector import HandLandmarkSource  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Classify the hand shape in a single image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument(
        "--tasks-model",
        default="models/hand_landmarker.task",
        help="Path to MediaPipe Tasks model (auto-downloaded if missing)",
    )
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    app = ShapeTrailApp()
    with HandLandmarkSource(static_image_mode=True, tasks_model_path=args.tasks_model) as source:
        landmarks = source.detect(frame)
        out = app.step(frame, landmarks)

    ok = cv2.imwrite(args.out, out)
    if not ok:
        raise RuntimeError(f"Could not write output image: {args.out}")

    result = app.last_result
    if result is None or result.classified is None:
        print("hand: none")
        return 0

    c = result.classified
    shape = c.shape.value if c.shape is not None else "unrecognized"
    print(
        f"shape={shape} fingers={c.extended_finger_count} "
        f"pinch={c.normalized_pinch_distance:.3f} pinching={c.is_pinching} "
        f"height={c.hand_height:.2f} center=({c.center[0]:.3f}, {c.center[1]:.3f}) "
        f"confidence={c.confidence:.2f}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
