from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

import yaml

from ungd_nlp.messages import analysis_messages as msg
from ungd_nlp.utils.exceptions import DataLoadError, InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dictionary:
    """Fixed mapping of category -> glob patterns (``econom*``, ``tax``)."""

    name: str
    categories: Mapping[str, Tuple[str, ...]]

    @classmethod
    def from_mapping(cls, name: str, mapping: Mapping[str, Any]) -> "Dictionary":
        flat = _flatten(mapping)
        if not flat:
            raise InvalidConfigurationError(msg.DICTIONARY_EMPTY.format(name=name))
        return cls(name=name, categories=MappingProxyType(flat))

    @property
    def keys(self) -> List[str]:
        return list(self.categories)

    def select(self, *keys: str) -> "Dictionary":
        """Sub-dictionary with only ``keys``, e.g. the positive/negative pair."""
        unknown = [k for k in keys if k not in self.categories]
        if unknown:
            raise InvalidConfigurationError(
                msg.DICTIONARY_UNKNOWN_KEYS.format(name=self.name, keys=unknown)
            )
        return Dictionary(
            name=self.name,
            categories=MappingProxyType({k: self.categories[k] for k in keys}),
        )

    def __len__(self) -> int:
        return len(self.categories)


def _flatten(
    mapping: Mapping[str, Any], prefix: str = ""
) -> Dict[str, Tuple[str, ...]]:
    # nested keys are joined with "." (macroeconomics.inflation)
    out: Dict[str, Tuple[str, ...]] = {}
    for key, value in mapping.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            out.update(_flatten(value, prefix=f"{name}."))
        elif isinstance(value, (list, tuple)):
            out[name] = tuple(str(v).strip() for v in value if str(v).strip())
        elif isinstance(value, str):
            out[name] = (value.strip(),)
        else:
            raise ValueError(
                f"category '{name}' must list patterns, "
                f"got {type(value).__name__}"
            )
    return out


def _parse_liwc(text: str) -> Dict[str, List[str]]:
    """LIWC .dic: a %-delimited header of ``id<TAB>category``, then ``pattern<TAB>ids``
    lines.
    """
    parts = re.split(r"^\s*%\s*$", text, flags=re.MULTILINE)
    if len(parts) < 3:
        raise ValueError("missing '%' header delimiters")
    ids: Dict[str, str] = {}
    for line in parts[1].splitlines():
        if line.strip():
            num, cat = line.split(None, 1)
            ids[num] = cat.strip()
    out: Dict[str, List[str]] = {cat: [] for cat in ids.values()}
    for line in parts[2].splitlines():
        fields = line.split()
        if not fields:
            continue
        pattern, nums = fields[0], fields[1:]
        for num in nums:
            if num not in ids:
                raise ValueError(
                    f"pattern '{pattern}' refers to unknown category id {num}"
                )
            out[ids[num]].append(pattern)
    return out


def load_dictionary(path: str | Path, name: str | None = None) -> Dictionary:
    """Load a YAML, JSON or LIWC-format lexicon."""
    path = Path(path)
    if not path.exists():
        raise DataLoadError(msg.DICTIONARY_NOT_FOUND.format(path=path))

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
        if suffix in (".yml", ".yaml"):
            raw = yaml.safe_load(text)
        elif suffix == ".json":
            raw = json.loads(text)
        elif suffix == ".dic":
            raw = _parse_liwc(text)
        else:
            raise ValueError(f"unsupported dictionary format '{suffix}'")
        if not isinstance(raw, Mapping):
            raise ValueError("top level must map categories to patterns")
        dictionary = Dictionary.from_mapping(name or path.stem, raw)
    except InvalidConfigurationError:
        raise
    except (ValueError, OSError, yaml.YAMLError) as e:
        raise DataLoadError(msg.DICTIONARY_MALFORMED.format(path=path, error=e)) from e

    logger.info(
        f"Loaded dictionary '{dictionary.name}' with {len(dictionary)} categories"
    )
    return dictionary
