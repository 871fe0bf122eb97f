from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import cv2

from .model_assets import ensure_hand_landmarker_task
from .types import Landmark

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SolutionsBackend:
    mp: object
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(
    static_image_mode: bool,
    model_complexity: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=static_image_mode,
        max_num_hands=1,
        model_complexity=model_complexity,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(mp=mp, hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    static_image_mode: bool,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> _TasksBackend:
    """
    Fallback for MediaPipe distributions that do not include `mp.solutions`.

    Uses the MediaPipe Tasks HandLandmarker API, which requires a `.task` model asset on disk.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=RunningMode.IMAGE if static_image_mode else RunningMode.VIDEO,
        num_hands=1,
        min_hand_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _TasksBackend(mp=mp, landmarker=HandLandmarker.create_from_options(options))


def _to_landmarks(raw) -> List[Landmark]:
    out: List[Landmark] = []
    for lm in raw:
        z = getattr(lm, "z", None)
        visibility = getattr(lm, "visibility", None)
        out.append(
            Landmark(
                x=float(lm.x),
                y=float(lm.y),
                z=float(z) if z is not None else 0.0,
                visibility=float(visibility) if visibility is not None else None,
            )
        )
    return out


class HandLandmarkSource:
    """
    Single-hand landmark source backed by MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default). `detect`
    returns the 21 landmarks of the first hand, or None when no hand is visible.
    """

    def __init__(
        self,
        static_image_mode: bool = False,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.7,
        min_tracking_confidence: float = 0.7,
        tasks_model_path: str = "models/hand_landmarker.task",
        frame_interval_ms: int = 33,
    ) -> None:
        self._static_image_mode = static_image_mode
        self._frame_interval_ms = frame_interval_ms
        self._tasks_timestamp_ms = 0
        self._tasks: Optional[_TasksBackend] = None
        self._solutions: Optional[_SolutionsBackend] = _try_create_solutions_backend(
            static_image_mode=static_image_mode,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

        if self._solutions is not None:
            logger.info("using MediaPipe solutions backend")
            return

        try:
            self._tasks = _try_create_tasks_backend(
                model_path=tasks_model_path,
                static_image_mode=static_image_mode,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except FileNotFoundError as e:
            raise RuntimeError(
                "MediaPipe does not provide `mp.solutions` in your environment, so the Tasks\n"
                "HandLandmarker fallback is used, which needs a model file on disk:\n"
                f"  {tasks_model_path}"
            ) from e
        except ImportError as e:
            raise RuntimeError(
                "Could not initialize MediaPipe Hands: the installed `mediapipe` package exposes\n"
                "neither `mp.solutions` nor the Tasks vision API."
            ) from e
        logger.info("using MediaPipe Tasks backend (%s)", tasks_model_path)

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandLandmarkSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr) -> Optional[List[Landmark]]:
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return None
            return _to_landmarks(results.multi_hand_landmarks[0].landmark)

        if self._tasks is None:
            return None

        mp = self._tasks.mp
        if not hasattr(mp, "Image") or not hasattr(mp, "ImageFormat"):
            raise RuntimeError("Your MediaPipe build does not expose `mp.Image` required for the Tasks API.")
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        if self._static_image_mode:
            result = self._tasks.landmarker.detect(mp_image)
        else:
            # VIDEO mode requires monotonically increasing timestamps.
            self._tasks_timestamp_ms += self._frame_interval_ms
            result = self._tasks.landmarker.detect_for_video(mp_image, self._tasks_timestamp_ms)

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        if not hand_landmarks_list:
            return None
        return _to_landmarks(hand_landmarks_list[0])
