# app/services/qr.py
import io

import qrcode  # type: ignore

def render_qr_png(text: str) -> bytes:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
