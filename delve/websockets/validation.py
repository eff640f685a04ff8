"""Lightweight payload validation utilities.

Shared by the Socket.IO handlers and the JSON game API so both surfaces
report bad input the same way.

Design goals:
- No schema library; small, explicit, not a general JSON Schema implementation.
- Return (ok, value_or_error) tuples; caller decides how to report the error.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int'
Extras:
  str: min_len, max_len, choices (lower-cased before the check)
  int: min, max

Example:
 ok, data_or_err = validate({'index': 2}, SHOP_BUY)

If invalid: (False, {'field': 'index', 'error': 'expected int', 'code': 'type'})
If valid: (True, normalized_data)
"""
from __future__ import annotations
from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        # bool is an int subclass; never accept it as a number
        if isinstance(value, bool) or not isinstance(value, PRIMITIVES[type_name]):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip()
            if not s:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(s) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'choices' in extras:
                s = s.lower()
                if s not in extras['choices']:
                    return _fail(name, 'unknown value', 'choices')
            out[name] = s
        elif type_name == 'int':
            if 'min' in extras and value < extras['min']:
                return _fail(name, 'too small', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, 'too large', 'max')
            out[name] = value
    return True, out


# Predefined schemas used by handlers
JOIN_GAME = {
    'game_id': ('str', True, {'min_len': 1, 'max_len': 64})
}
LEAVE_GAME = JOIN_GAME
MOVE_NAMED = {
    'dir': ('str', True, {'choices': ('n', 's', 'e', 'w', 'wait')})
}
MOVE_DELTA = {
    'dx': ('int', True, {'min': -1, 'max': 1}),
    'dy': ('int', True, {'min': -1, 'max': 1}),
}
INDEXED = {
    'index': ('int', True, {'min': 0})
}
NEW_GAME = {
    'seed': ('int', False, {'min': 0})
}
