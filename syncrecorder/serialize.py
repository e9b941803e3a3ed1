"""JSON documents for recorded kinematics, written in the styled layout."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any

from .models import KinematicData

_INDENT = "   "
_RIGHT_MARGIN = 74


def _header(data: KinematicData) -> dict[str, int]:
    return {"sec": data.stamp.sec, "nsec": data.stamp.nsec}


def _full_block(data: KinematicData) -> dict[str, Any]:
    block: dict[str, Any] = {"position": list(data.position)}
    if data.orientation:
        block["orientation"] = list(data.orientation)
    block["velocity"] = list(data.velocity)
    block["effort"] = list(data.effort)
    return block


def _optional_block(data: KinematicData | None) -> dict[str, Any] | None:
    if data is None or not data.position:
        return None
    return _full_block(data)


def _jaw_block(data: KinematicData | None) -> dict[str, Any] | None:
    if data is None or not data.position:
        return None
    return {"position": list(data.position)}


def psm_document(
    measured: KinematicData,
    setpoint: KinematicData | None = None,
    jaw_measured: KinematicData | None = None,
    jaw_setpoint: KinematicData | None = None,
    cartesian_velocity: KinematicData | None = None,
) -> dict[str, Any]:
    """Document for a patient-side arm: header, arm and jaw blocks.

    Set-point and jaw blocks are None when no sample with a position exists.
    """
    arm_measured = _full_block(measured)
    if cartesian_velocity is not None and cartesian_velocity.velocity:
        arm_measured["cartesian_velocity"] = list(cartesian_velocity.velocity)
    return {
        "header": _header(measured),
        "arm": {
            "measured_data": arm_measured,
            "setpoint_data": _optional_block(setpoint),
        },
        "jaw": {
            "measured_data": _jaw_block(jaw_measured),
            "setpoint_data": _jaw_block(jaw_setpoint),
        },
    }


def ecm_document(
    measured: KinematicData, setpoint: KinematicData | None = None
) -> dict[str, Any]:
    """Document for the endoscope arm: header, measured and set-point data."""
    return {
        "header": _header(measured),
        "measured_data": _full_block(measured),
        "setpoint_data": _optional_block(setpoint),
    }


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "null"
    if math.isinf(value):
        return "1e+9999" if value > 0 else "-1e+9999"
    text = "%.17g" % value
    if "." not in text and "e" not in text:
        text += ".0"
    return text


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or (
        isinstance(value, Sequence) and not isinstance(value, (str, bytes))
    )


class _StyledWriter:
    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._last = ""
        self._indent = ""

    def result(self) -> str:
        return "".join(self._chunks)

    def _emit(self, text: str) -> None:
        if text:
            self._chunks.append(text)
            self._last = text[-1]

    def _write_indent(self) -> None:
        if self._last:
            if self._last == " ":
                return
            if self._last != "\n":
                self._emit("\n")
        self._emit(self._indent)

    def _with_indent(self, text: str) -> None:
        self._write_indent()
        self._emit(text)

    def _scalar(self, value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        if isinstance(value, str):
            return json.dumps(value)
        if isinstance(value, Mapping) and not value:
            return "{}"
        if _is_container(value) and not value:
            return "[]"
        raise TypeError(f"cannot serialise value of type {type(value).__name__}")

    def write_value(self, value: Any) -> None:
        if isinstance(value, Mapping) and value:
            self._write_object(value)
        elif _is_container(value) and value:
            self._write_array(list(value))
        else:
            self._emit(self._scalar(value))

    def _write_object(self, value: Mapping) -> None:
        for key in value:
            if not isinstance(key, str):
                raise TypeError(f"object keys must be strings, got {type(key).__name__}")
        keys = sorted(value)
        self._with_indent("{")
        self._indent += _INDENT
        for position, key in enumerate(keys):
            self._with_indent(json.dumps(key))
            self._emit(" : ")
            self.write_value(value[key])
            if position + 1 < len(keys):
                self._emit(",")
        self._indent = self._indent[: -len(_INDENT)]
        self._with_indent("}")

    def _child_strings(self, values: list[Any]) -> list[str] | None:
        """Inline renderings of the children, or None if the array needs lines."""
        if len(values) * 3 >= _RIGHT_MARGIN:
            return None
        if any(_is_container(v) and v for v in values):
            return None
        return [self._scalar(v) for v in values]

    def _write_array(self, values: list[Any]) -> None:
        children = self._child_strings(values)
        multiline = children is None
        if children is not None:
            line_length = 4 + (len(values) - 1) * 2 + sum(len(c) for c in children)
            multiline = line_length >= _RIGHT_MARGIN
        if not multiline:
            self._emit("[ " + ", ".join(children) + " ]")
            return
        self._with_indent("[")
        self._indent += _INDENT
        for position, child in enumerate(values):
            if children is not None:
                self._with_indent(children[position])
            else:
                self._write_indent()
                self.write_value(child)
            if position + 1 < len(values):
                self._emit(",")
        self._indent = self._indent[: -len(_INDENT)]
        self._with_indent("]")


def styled_json(document: Any) -> str:
    """Render ``document`` with sorted keys, three-space indents and a final newline."""
    writer = _StyledWriter()
    writer.write_value(document)
    return writer.result() + "\n"