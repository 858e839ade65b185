"""Linguistic helpers: pluralization, verb conjugation and type metadata."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from nounspec.ir.noun import NounDescriptor

IRREGULAR_PLURALS: Dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "ox": "oxen",
    "leaf": "leaves",
    "life": "lives",
    "knife": "knives",
    "wife": "wives",
    "half": "halves",
    "self": "selves",
    "calf": "calves",
    "analysis": "analyses",
    "crisis": "crises",
    "thesis": "theses",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "phenomenon": "phenomena",
}

IRREGULAR_SINGULARS: Dict[str, str] = {v: k for k, v in IRREGULAR_PLURALS.items()}

# Verbs whose final consonant doubles before -ed/-er/-ing (submit -> submitted)
DOUBLING_VERBS = frozenset(
    """
    submit commit permit omit admit emit transmit refer prefer defer occur recur
    begin stop drop shop plan scan ban run stun cut shut hit sit fit quit knit
    get set put drag flag tag hug bug rub scrub grab rob nod plot spot knot chat
    pat slap clap flap tap wrap snap trap cap map nap zap tip sip dip rip zip
    slip trip drip chip clip flip grip ship skip whip strip equip hop pop mop
    chop crop prop flop swim trim skim dim jam cram slam dam scam spam hum drum
    sum
    """.split()
)

VOWELS = "aeiou"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])|([A-Z])([A-Z][a-z])")


def _is_vowel(char: str) -> bool:
    return bool(char) and char.lower() in VOWELS


def _preserve_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _doubles_final_consonant(verb: str) -> bool:
    if len(verb) < 2:
        return False
    last, second_last = verb[-1], verb[-2]
    if last in "wxy" or _is_vowel(last) or not _is_vowel(second_last):
        return False
    # Short words (3 letters) almost always double
    if len(verb) <= 3:
        return True
    return any(verb == v or verb.endswith(v) for v in DOUBLING_VERBS)


def split_camel_case(name: str) -> List[str]:
    """
    Split an identifier into words.

    Args:
        name: CamelCase or PascalCase identifier, e.g. "SSOConnection"

    Returns:
        Words, e.g. ["SSO", "Connection"]
    """
    spaced = _CAMEL_BOUNDARY.sub(
        lambda m: f"{m.group(1)} {m.group(2)}" if m.group(1) else f"{m.group(3)} {m.group(4)}",
        name,
    )
    return spaced.split()


def pascal_case(text: str) -> str:
    """Turn a display name into a noun name ("ad group" -> "AdGroup")."""
    words = re.split(r"[\s_\-]+", text.strip())
    return "".join(w[:1].upper() + w[1:] for w in words if w)


def pluralize(singular: str) -> str:
    """
    Pluralize a single word, honouring irregular forms.

    Args:
        singular: Word to pluralize, e.g. "category"

    Returns:
        Plural form, e.g. "categories"
    """
    lower = singular.lower()
    if lower in IRREGULAR_PLURALS:
        return _preserve_case(singular, IRREGULAR_PLURALS[lower])
    if lower.endswith("y") and len(lower) > 1 and not _is_vowel(lower[-2]):
        return singular[:-1] + "ies"
    # quiz -> quizzes
    if lower.endswith("z") and not lower.endswith("zz"):
        return singular + "zes"
    if lower.endswith(("s", "x", "zz", "ch", "sh")):
        return singular + "es"
    if lower.endswith("f"):
        return singular[:-1] + "ves"
    if lower.endswith("fe"):
        return singular[:-2] + "ves"
    return singular + "s"


def singularize(plural: str) -> str:
    """Reverse of pluralize()."""
    lower = plural.lower()
    if lower in IRREGULAR_SINGULARS:
        return _preserve_case(plural, IRREGULAR_SINGULARS[lower])
    if lower.endswith("ies"):
        return plural[:-3] + "y"
    if lower.endswith("ves"):
        return plural[:-3] + "f"
    if lower.endswith(("sses", "xes", "zes", "ches", "shes")):
        return plural[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return plural[:-1]
    return plural


def pluralize_phrase(phrase: str) -> str:
    """Pluralize the last word of a display name ("ad group" -> "ad groups")."""
    head, sep, last = phrase.rpartition(" ")
    if "-" in last:
        prefix, dash, last = last.rpartition("-")
        return f"{head}{sep}{prefix}{dash}{pluralize(last)}"
    return f"{head}{sep}{pluralize(last)}"


def to_past_tense(verb: str) -> str:
    """
    Past participle of a base verb, as used for event names.

    Args:
        verb: Base form, e.g. "submit" or "publish"

    Returns:
        Past form, e.g. "submitted" or "published"
    """
    if verb.endswith("e"):
        return verb + "d"
    if verb.endswith("y") and len(verb) > 1 and not _is_vowel(verb[-2]):
        return verb[:-1] + "ied"
    if _doubles_final_consonant(verb):
        return verb + verb[-1] + "ed"
    return verb + "ed"


def _to_actor(verb: str) -> str:
    if verb.endswith("e"):
        return verb + "r"
    if verb.endswith("y") and len(verb) > 1 and not _is_vowel(verb[-2]):
        return verb[:-1] + "ier"
    if _doubles_final_consonant(verb):
        return verb + verb[-1] + "er"
    return verb + "er"


def _to_present(verb: str) -> str:
    if verb.endswith("y") and len(verb) > 1 and not _is_vowel(verb[-2]):
        return verb[:-1] + "ies"
    if verb.endswith(("s", "x", "z", "ch", "sh")):
        return verb + "es"
    return verb + "s"


def _to_gerund(verb: str) -> str:
    if verb.endswith("ie"):
        return verb[:-2] + "ying"
    if verb.endswith("e") and not verb.endswith("ee"):
        return verb[:-1] + "ing"
    if _doubles_final_consonant(verb):
        return verb + verb[-1] + "ing"
    return verb + "ing"


def _to_result(verb: str) -> str:
    if verb.endswith("ate"):
        return verb[:-1] + "ion"
    if verb.endswith("ify"):
        return verb[:-1] + "ication"
    if verb.endswith("ize"):
        return verb[:-1] + "ation"
    if verb.endswith("e"):
        return verb[:-1] + "ion"
    return verb + "ion"


@dataclass(frozen=True)
class VerbForms:
    """All linguistic forms derived from one action."""

    action: str
    actor: str  # creator
    act: str  # creates
    activity: str  # creating
    result: str  # creation
    reverse: Dict[str, str] = field(default_factory=dict)  # {"at": "createdAt", ...}


# Verbs whose forms the suffix rules get wrong
KNOWN_VERBS: Dict[str, VerbForms] = {
    "create": VerbForms(
        "create", "creator", "creates", "creating", "creation",
        {"at": "createdAt", "by": "createdBy", "in": "createdIn", "for": "createdFor"},
    ),
    "update": VerbForms(
        "update", "updater", "updates", "updating", "update",
        {"at": "updatedAt", "by": "updatedBy"},
    ),
    "delete": VerbForms(
        "delete", "deleter", "deletes", "deleting", "deletion",
        {"at": "deletedAt", "by": "deletedBy"},
    ),
    "publish": VerbForms(
        "publish", "publisher", "publishes", "publishing", "publication",
        {"at": "publishedAt", "by": "publishedBy"},
    ),
    "archive": VerbForms(
        "archive", "archiver", "archives", "archiving", "archive",
        {"at": "archivedAt", "by": "archivedBy"},
    ),
}


def conjugate(action: str) -> VerbForms:
    """
    Derive every form of a verb from its base.

    camelCase actions ("submitForReview") are conjugated on their leading verb;
    the remaining words are carried along unchanged.

    Args:
        action: Base verb, e.g. "publish"

    Returns:
        VerbForms, e.g. actor "publisher", reverse {"at": "publishedAt", ...}
    """
    if action in KNOWN_VERBS:
        return KNOWN_VERBS[action]

    words = split_camel_case(action) or [action]
    base, rest = words[0].lower(), "".join(words[1:])
    past = to_past_tense(base)
    return VerbForms(
        action=action,
        actor=_to_actor(base) + rest,
        act=_to_present(base) + rest,
        activity=_to_gerund(base) + rest,
        result=_to_result(base) + rest,
        reverse={
            "at": f"{past}{rest}At",
            "by": f"{past}{rest}By",
            "in": f"{past}{rest}In",
            "for": f"{past}{rest}For",
        },
    )


def infer_noun(type_name: str) -> Dict[str, object]:
    """
    Infer display names and default verbs from a noun name.

    Args:
        type_name: PascalCase name, e.g. "BlogPost"

    Returns:
        Mapping with singular "blog post", plural "blog posts" and default
        create/update/delete actions and events
    """
    words = split_camel_case(type_name) or [type_name]
    singular = " ".join(words).lower()
    plural = " ".join(words[:-1] + [pluralize(words[-1])]).lower()
    return {
        "singular": singular,
        "plural": plural,
        "actions": ["create", "update", "delete"],
        "events": ["created", "updated", "deleted"],
    }


@dataclass(frozen=True)
class TypeMeta:
    """Names a consumer derives from a noun: slugs, audit fields and event types."""

    name: str
    singular: str
    plural: str
    slug: str
    slug_plural: str
    creator: str = "creator"
    created_at: str = "createdAt"
    created_by: str = "createdBy"
    updated_at: str = "updatedAt"
    updated_by: str = "updatedBy"
    created: str = ""
    updated: str = ""
    deleted: str = ""


def type_meta(name: str, noun: Optional["NounDescriptor"] = None) -> TypeMeta:
    """
    Build TypeMeta for a noun name.

    Args:
        name: Noun name, e.g. "AdGroup"
        noun: Descriptor whose singular/plural override the inferred ones

    Returns:
        TypeMeta with slug "ad-group" and event types like "AdGroup.created"
    """
    if noun is not None:
        singular, plural = noun.singular, noun.plural
    else:
        inferred = infer_noun(name)
        singular, plural = str(inferred["singular"]), str(inferred["plural"])

    return TypeMeta(
        name=name,
        singular=singular,
        plural=plural,
        slug=re.sub(r"\s+", "-", singular.strip()),
        slug_plural=re.sub(r"\s+", "-", plural.strip()),
        created=f"{name}.created",
        updated=f"{name}.updated",
        deleted=f"{name}.deleted",
    )
