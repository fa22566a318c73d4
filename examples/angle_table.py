"""Example script that asks a running server for the tilt angle of every printer."""
from __future__ import annotations

import requests

SERVER = "http://localhost:8000"


def main(layer_height: float = 50.0) -> None:
    res = requests.get(f"{SERVER}/api/printers", timeout=5)
    res.raise_for_status()
    for printer in res.json()["printers"]:
        derived = requests.post(
            f"{SERVER}/api/derive",
            json={"printer_id": printer["id"], "layer_height": layer_height},
            timeout=5,
        )
        derived.raise_for_status()
        data = derived.json()
        angle_x = data["angle_x"]["display"] if data["angle_x"] else None
        angle_y = data["angle_y"]["display"] if data["angle_y"] else None
        print(f"{printer['manufacturer']} {printer['model']}: X {angle_x}°  Y {angle_y}°")


if __name__ == "__main__":
    main()
