from __future__ import annotations
import cv2, time
from typing import Iterator, Dict, Any

STALE_LIMIT = 3  # repeated timestamps before assuming the backend has no clock

def frames(camera: int|str=0, width: int=640, height: int=480) -> Iterator[Dict[str,Any]]:
    """
    Yield {"image": bgr, "meta": {"ts": ..., "pos_ms": ...}} until the source runs dry.
    A frame whose position repeats the previous one is dropped, unless the
    backend keeps reporting the same position (no usable clock).
    """
    cap = cv2.VideoCapture(camera)
    if width:  cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    if not cap.isOpened():
        raise RuntimeError(f"Cannot open camera {camera!r}")
    last_pos, stale, dedupe = None, 0, True
    try:
        while True:
            ok, frame = cap.read()
            if not ok: break
            pos = cap.get(cv2.CAP_PROP_POS_MSEC)
            if dedupe and pos and pos == last_pos:
                stale += 1
                if stale < STALE_LIMIT: continue
                dedupe = False
            else:
                stale = 0
            last_pos = pos
            yield {"image": frame, "meta": {"ts": time.time(), "pos_ms": pos}}
    finally:
        cap.release()
