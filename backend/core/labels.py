import io
import json
from typing import Any, Dict, List, Mapping

import qrcode

from db.inventory.item import DEFAULT_CATEGORY


def label_payload(item: Mapping[str, Any]) -> str:
    """Text encoded in an item's QR code; the scanner decodes it back with parse_label."""
    return json.dumps({"id": item["id"], "name": item["name"]}, separators=(",", ":"), ensure_ascii=False)


def parse_label(text: str) -> str:
    """Return the item id from decoded QR text. Raises ValueError when there is none."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("label is not a JSON object")
    item_id = data.get("id")
    if item_id is None or not str(item_id).strip():
        raise ValueError("label has no id")
    return str(item_id).strip()


def render_qr_png(payload: str, box_size: int = 10, border: int = 4) -> bytes:
    qr = qrcode.QRCode(box_size=box_size, border=border)
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def build_qr_sheet(items: List[Mapping[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Group printable labels by category, keeping the order items were given in."""
    sheet: Dict[str, List[Dict[str, Any]]] = {}
    for item in items:
        category = item.get("category") or DEFAULT_CATEGORY
        price = float(item.get("price") or 0.0)
        sheet.setdefault(category, []).append({
            "id": item["id"],
            "name": item["name"],
            "price": price,
            "price_label": f"${price:.2f}",
            "payload": label_payload(item),
        })
    return sheet
