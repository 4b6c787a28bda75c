"""Spanish message catalog."""

from __future__ import annotations

MESSAGES: dict[str, str] = {
    "required": "{field} es obligatorio",
    "type_mismatch": "{field} debe ser de tipo {type}",
    "email_invalid": "{field} debe ser un correo electrónico válido",
    "min_length": "{field} debe tener al menos {arg} caracteres",
    "max_length": "{field} debe tener como máximo {arg} caracteres",
    "min": "{field} debe ser mayor o igual que {arg}",
    "max": "{field} debe ser menor o igual que {arg}",
    "pattern": "{field} no coincide con el patrón requerido",
    "one_of": "{field} debe ser uno de {arg}",
}
