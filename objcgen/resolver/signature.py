"""Parse native type signatures into IR types."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Tuple

from ..entities.store import EntityStore
from ..ir import Array, ExternWrapper, FuncArg, FunctionType, Named, Primitive, Type, Unknown
from ..logging import get_logger
from ..models import LinkedText, MemberDef
from .constants import (
    OPAQUE_POINTER,
    OVERRIDE_TYPES,
    PRIMITIVE_TYPES,
    VOID,
    WRAPPERS,
    Wrapper,
)

_FUNCTION_POINTER = re.compile(r"\(\*\s*\)\(")
_NOT_NAMED = (" ", "(", ")", ":", "[", "]")
_BRACKETS = {"(": ")", "[": "]"}


class SignatureError(RuntimeError):
    """Raised when a signature nests wrappers or brackets in a malformed way."""


class SignatureResolver:
    """Turns signature strings and cross-reference tokens into IR types.

    Rules are tried in a fixed order and the first match wins: overrides,
    function pointers, qualifier wrappers, fixed arrays, primitives, bare
    identifiers, and finally ``Unknown``.
    """

    def __init__(
        self,
        store: EntityStore | None = None,
        *,
        overrides: Dict[str, Type] | None = None,
        primitives: Dict[str, str] | None = None,
        wrappers: Iterable[Wrapper] | None = None,
    ) -> None:
        self.store = store if store is not None else EntityStore()
        self.overrides = dict(OVERRIDE_TYPES if overrides is None else overrides)
        self.primitives = dict(PRIMITIVE_TYPES if primitives is None else primitives)
        self.wrappers = list(WRAPPERS if wrappers is None else wrappers)
        self.logger = get_logger("resolver")

    def resolve(self, signature: str) -> Optional[Type]:
        """Resolve a textual signature; ``None`` stands for ``void``."""
        return self._resolve(_normalise(signature))

    def resolve_linked(self, linked: Optional[LinkedText], suffix: str = "") -> Optional[Type]:
        """Resolve type text that may carry cross-reference tokens."""
        if linked is None:
            return Unknown()
        if len(linked.refs) == 1:
            return self.store.reference(linked.refs[0])
        if linked.refs:
            # Tokens interleave with text and the index does not say which part each ref covers.
            self.logger.warning("Unsupported mixed reference type %r (refs: %s)", linked.text, ", ".join(linked.refs))
            return Unknown(raw=linked.text, comment="ref type")
        return self.resolve(f"{linked.text} {suffix}")

    def resolve_member(self, member: MemberDef) -> Optional[Type]:
        return self.resolve_linked(member.type, member.argsstring)

    def _resolve(self, text: str) -> Optional[Type]:
        _check_balanced(text)
        if text == VOID:
            return None
        override = self.overrides.get(text)
        if override is not None:
            return override

        function = self._resolve_function_pointer(text)
        if function is not None:
            return function

        for wrapper in self.wrappers:
            remainder = _strip_wrapper(text, wrapper)
            if remainder is None:
                continue
            token = wrapper.token.strip()
            if not remainder:
                raise SignatureError(f"{token}({text!r}): nothing left after the qualifier")
            try:
                elem = self._resolve(remainder)
            except SignatureError as exc:
                raise SignatureError(f"{token}({text!r}): {exc}") from exc
            return _apply_wrapper(wrapper, elem)

        if text.endswith("]"):
            index = text.rfind("[")
            if index > 0:
                size = text[index + 1 : -1].strip()
                try:
                    elem = self._resolve(text[:index].strip())
                except SignatureError as exc:
                    raise SignatureError(f"arr({text!r}): {exc}") from exc
                if elem is None:
                    return Unknown(raw=text, comment=text)
                return Array(elem, size)

        primitive = self.primitives.get(text)
        if primitive is not None:
            return Primitive(primitive)
        if not any(char in text for char in _NOT_NAMED):
            return Named(text)
        return Unknown(raw=text, comment=text)

    def _resolve_function_pointer(self, text: str) -> Optional[FunctionType]:
        if not text.endswith(")"):
            return None
        match = _FUNCTION_POINTER.search(text)
        if match is None:
            return None
        try:
            ret = self._resolve(text[: match.start()].strip())
            args: List[FuncArg] = []
            for segment in _split_arguments(text[match.end() : -1]):
                name, type_text = self._split_argument_name(segment)
                args.append(FuncArg(name=name, type=self._resolve(type_text)))
        except SignatureError as exc:
            raise SignatureError(f"func({text!r}): {exc}") from exc
        return FunctionType(ret=ret, args=tuple(args))

    def _split_argument_name(self, segment: str) -> Tuple[str, str]:
        suffix = ""
        if segment.endswith("[]"):
            segment = segment[:-2].rstrip()
            suffix = "[]"
        if segment == VOID or segment in self.overrides or segment in self.primitives:
            return "", segment + suffix
        # Scan backward for the last character that cannot be part of an identifier.
        cut = -1
        for index in range(len(segment) - 1, -1, -1):
            char = segment[index]
            if not (char.isalnum() or char == "_"):
                cut = index
                break
        if 0 <= cut < len(segment) - 1:
            return segment[cut + 1 :], segment[: cut + 1].strip() + suffix
        return "", segment + suffix


def _normalise(signature: str) -> str:
    return " ".join(signature.split())


def _check_balanced(text: str) -> None:
    stack: List[str] = []
    closers = {close: open_ for open_, close in _BRACKETS.items()}
    for char in text:
        if char in _BRACKETS:
            stack.append(char)
        elif char in closers:
            if not stack or stack[-1] != closers[char]:
                raise SignatureError(f"unbalanced {char!r} in {text!r}")
            stack.pop()
    if stack:
        raise SignatureError(f"unclosed {stack[-1]!r} in {text!r}")


def _strip_wrapper(text: str, wrapper: Wrapper) -> Optional[str]:
    if wrapper.suffix:
        if not text.endswith(wrapper.token):
            return None
        return text[: -len(wrapper.token)].strip()
    if not text.startswith(wrapper.token):
        return None
    return text[len(wrapper.token) :].strip()


def _apply_wrapper(wrapper: Wrapper, elem: Optional[Type]) -> Optional[Type]:
    if elem is None:
        if wrapper.token == "*":
            return OPAQUE_POINTER
        if wrapper.wrap is not ExternWrapper:
            return None
    return wrapper.wrap(elem)


def _split_arguments(text: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    parts = [part for part in parts if part]
    if parts == [VOID]:
        return []
    return parts


__all__ = ["SignatureError", "SignatureResolver"]
