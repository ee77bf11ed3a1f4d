from typing import Optional
import logging
import cv2
import numpy as np
from fastapi import FastAPI, File, UploadFile, Query, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .config import DEFAULT_PARAMS
from .core import SymbolDetector, result_to_json
from .types import DetectorParams

logger = logging.getLogger(__name__)

app = FastAPI(title="Symbol Detect API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def decode_upload_to_bgr(upload: UploadFile) -> np.ndarray:
    data = upload.file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file.")
    arr = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if img is None:
        raise HTTPException(status_code=400, detail="Could not decode image. Provide a valid JPG/PNG.")
    return img


@app.post("/detect")
def detect(
    file: UploadFile = File(...),
    t1: float = Query(DEFAULT_PARAMS["t1"], description="Canny low threshold"),
    t2: float = Query(DEFAULT_PARAMS["t2"], description="Canny high threshold"),
    poly_acc: float = Query(DEFAULT_PARAMS["poly_acc"], description="Polygon simplification, fraction of perimeter"),
    circle_acc: float = Query(DEFAULT_PARAMS["circle_acc"], description="Hough circle perfectness threshold"),
    grayscale_only: bool = Query(DEFAULT_PARAMS["grayscale_only"]),
    t2_ratio: Optional[float] = Query(None, description="When set, t2 = t1 * t2_ratio and t2 is ignored"),
):
    img = decode_upload_to_bgr(file)
    query = {"t1": t1, "t2": t2, "poly_acc": poly_acc, "circle_acc": circle_acc, "grayscale_only": grayscale_only}
    if t2_ratio is not None:
        query.pop("t2")
        params = DetectorParams.from_ratio(query.pop("t1"), t2_ratio, **query)
    else:
        params = DetectorParams.from_dict(query)
    logger.info("Detecting symbols with %s", params.to_dict())

    symbols = SymbolDetector(params).detect(img)
    return JSONResponse(result_to_json(symbols))
