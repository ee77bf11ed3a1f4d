import sys
import os
import json
import cv2
from .core import SymbolDetector, format_contour, load_image, result_to_json
from .log import setup_logging
from .types import DetectorParams

USAGE = """Usage: symdetect [-i] [-g] [-s] <image> [params.json]
  -i    paint intermediate stages
  -g    grayscale-only edge detection
  -s    show the result window
  params.json holds DetectorParams fields, e.g. {"t1": 20, "t2": 50}"""


def load_params(path: str) -> DetectorParams:
    with open(path, "r", encoding="utf-8") as f:
        return DetectorParams.from_dict(json.load(f))


def main(argv=None):
    argv = sys.argv if argv is None else argv
    flags = {a for a in argv[1:] if a.startswith("-")}
    paths = [a for a in argv[1:] if not a.startswith("-")]
    if len(paths) not in (1, 2) or flags - {"-i", "-g", "-s"}:
        print(USAGE)
        sys.exit(2)

    setup_logging(os.environ.get("SYMDETECT_LOG_LEVEL", "INFO"))
    in_path = paths[0]
    params = load_params(paths[1]) if len(paths) == 2 else DetectorParams()
    if "-g" in flags:
        params.grayscale_only = True
    img = load_image(in_path)

    os.makedirs("outputs", exist_ok=True)
    base = os.path.splitext(os.path.basename(in_path))[0]
    json_path = os.path.join("outputs", f"{base}.json")
    vis_path = os.path.join("outputs", f"{base}.jpg")

    symbols, vis = SymbolDetector(params).detect(img, return_overlay=True, debug="-i" in flags)

    for s in symbols:
        print(format_contour(s.square))
    print()

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(result_to_json(symbols), f, ensure_ascii=False, indent=2)
    print(f"[OK] Wrote JSON to: {json_path}")

    ok = cv2.imwrite(vis_path, vis)
    if not ok:
        raise RuntimeError(f"Failed to write image: {vis_path}")
    print(f"[OK] Wrote visualization to: {vis_path}")

    if "-s" in flags:
        from .visualize import show_image
        show_image(vis, title=base)


if __name__ == "__main__":
    main()
