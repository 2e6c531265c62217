from __future__ import annotations

from sislim.app.common.log_redaction import redact_text, redact_value


def test_redact_text_masks_email_and_phone() -> None:
    text = "Contacto: juan.perez@example.com tel +54 11 5555 6666"

    redacted = redact_text(text)

    assert "juan.perez@example.com" not in redacted
    assert "+54 11 5555 6666" not in redacted
    assert redacted.count("***") == 2


def test_redact_text_keeps_ids() -> None:
    assert redact_text("turno_id=42 disponibilidad_id=7") == "turno_id=42 disponibilidad_id=7"


def test_redact_value_masks_sensitive_keys_recursively() -> None:
    payload = {
        "nombre": "Juan Perez",
        "contacto": {"email": "jp@example.com", "telefono": "1133344455"},
        "items": [{"direccion": "Av. Siempre Viva 123"}],
        "turno_id": 3,
    }

    redacted = redact_value(payload)

    assert redacted["nombre"] == "***"
    assert redacted["contacto"]["email"] == "***"
    assert redacted["contacto"]["telefono"] == "***"
    assert redacted["items"][0]["direccion"] == "***"
    assert redacted["turno_id"] == 3
