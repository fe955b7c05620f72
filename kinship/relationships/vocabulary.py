"""Closed relationship vocabulary shared by deduction, graph building and the API.

Connection records store the product's Portuguese tags (``pai``, ``mae``,
``avó``...). Everything crossing into the engines goes through
:func:`normalize_relationship`, which maps known synonyms (accented forms,
display labels, English aliases) onto a :class:`RelationshipLabel` and
anything else onto ``RelationshipLabel.OTHER``.
"""

from __future__ import annotations

import unicodedata
from enum import Enum

from ..errors import InvalidRelationshipError


class RelationshipLabel(Enum):
    """Canonical relationship tags.

    A label always reads "<person> is my <label>": an edge tagged ``PAI``
    from Ana's side means the other person is Ana's father.
    """

    PAI = "pai"  # father
    MAE = "mae"  # mother
    FILHO = "filho"  # son
    FILHA = "filha"  # daughter
    IRMAO = "irmao"  # brother
    IRMA = "irma"  # sister
    AVO = "avo"  # grandfather
    AVA = "ava"  # grandmother
    NETO = "neto"  # grandson
    NETA = "neta"  # granddaughter
    TIO = "tio"  # uncle
    TIA = "tia"  # aunt
    SOBRINHO = "sobrinho"  # nephew
    SOBRINHA = "sobrinha"  # niece
    PRIMO = "primo"  # male cousin
    PRIMA = "prima"  # female cousin
    CONJUGE = "conjuge"  # spouse
    SOGRO = "sogro"  # father-in-law
    SOGRA = "sogra"  # mother-in-law
    GENRO = "genro"  # son-in-law
    NORA = "nora"  # daughter-in-law
    CUNHADO = "cunhado"  # brother-in-law
    CUNHADA = "cunhada"  # sister-in-law
    ANCESTRAL = "ancestral"
    AMIGO = "amigo"
    AMIGA = "amiga"
    COLEGA = "colega"
    OTHER = "outro"


FRIEND_LABELS = frozenset({RelationshipLabel.AMIGO, RelationshipLabel.AMIGA, RelationshipLabel.COLEGA})

FAMILY_LABELS = frozenset(
    label for label in RelationshipLabel if label not in FRIEND_LABELS and label is not RelationshipLabel.OTHER
)

DISPLAY_LABELS: dict[RelationshipLabel, str] = {
    RelationshipLabel.PAI: "Pai",
    RelationshipLabel.MAE: "Mãe",
    RelationshipLabel.FILHO: "Filho",
    RelationshipLabel.FILHA: "Filha",
    RelationshipLabel.IRMAO: "Irmão",
    RelationshipLabel.IRMA: "Irmã",
    RelationshipLabel.AVO: "Avô",
    RelationshipLabel.AVA: "Avó",
    RelationshipLabel.NETO: "Neto",
    RelationshipLabel.NETA: "Neta",
    RelationshipLabel.TIO: "Tio",
    RelationshipLabel.TIA: "Tia",
    RelationshipLabel.SOBRINHO: "Sobrinho",
    RelationshipLabel.SOBRINHA: "Sobrinha",
    RelationshipLabel.PRIMO: "Primo",
    RelationshipLabel.PRIMA: "Prima",
    RelationshipLabel.CONJUGE: "Cônjuge",
    RelationshipLabel.SOGRO: "Sogro",
    RelationshipLabel.SOGRA: "Sogra",
    RelationshipLabel.GENRO: "Genro",
    RelationshipLabel.NORA: "Nora",
    RelationshipLabel.CUNHADO: "Cunhado",
    RelationshipLabel.CUNHADA: "Cunhada",
    RelationshipLabel.ANCESTRAL: "Ancestral",
    RelationshipLabel.AMIGO: "Amigo",
    RelationshipLabel.AMIGA: "Amiga",
    RelationshipLabel.COLEGA: "Colega",
    RelationshipLabel.OTHER: "Outro",
}

# What the other side calls me when I call them <key>. The gendered defaults
# (mae -> filha, avo -> neto) are the product's; callers needing exact reverse
# labels read them from the stored connection instead.
INVERSE_LABELS: dict[RelationshipLabel, RelationshipLabel] = {
    RelationshipLabel.PAI: RelationshipLabel.FILHO,
    RelationshipLabel.MAE: RelationshipLabel.FILHA,
    RelationshipLabel.FILHO: RelationshipLabel.PAI,
    RelationshipLabel.FILHA: RelationshipLabel.MAE,
    RelationshipLabel.IRMAO: RelationshipLabel.IRMAO,
    RelationshipLabel.IRMA: RelationshipLabel.IRMA,
    RelationshipLabel.AVO: RelationshipLabel.NETO,
    RelationshipLabel.AVA: RelationshipLabel.NETA,
    RelationshipLabel.NETO: RelationshipLabel.AVO,
    RelationshipLabel.NETA: RelationshipLabel.AVA,
    RelationshipLabel.TIO: RelationshipLabel.SOBRINHO,
    RelationshipLabel.TIA: RelationshipLabel.SOBRINHA,
    RelationshipLabel.SOBRINHO: RelationshipLabel.TIO,
    RelationshipLabel.SOBRINHA: RelationshipLabel.TIA,
    RelationshipLabel.PRIMO: RelationshipLabel.PRIMO,
    RelationshipLabel.PRIMA: RelationshipLabel.PRIMA,
    RelationshipLabel.CONJUGE: RelationshipLabel.CONJUGE,
    RelationshipLabel.SOGRO: RelationshipLabel.GENRO,
    RelationshipLabel.SOGRA: RelationshipLabel.NORA,
    RelationshipLabel.GENRO: RelationshipLabel.SOGRO,
    RelationshipLabel.NORA: RelationshipLabel.SOGRA,
    RelationshipLabel.CUNHADO: RelationshipLabel.CUNHADO,
    RelationshipLabel.CUNHADA: RelationshipLabel.CUNHADA,
    RelationshipLabel.AMIGO: RelationshipLabel.AMIGO,
    RelationshipLabel.AMIGA: RelationshipLabel.AMIGA,
    RelationshipLabel.COLEGA: RelationshipLabel.COLEGA,
}

# Checked before accent folding: "avó" and "avô" fold to the same string
_EXACT_SYNONYMS: dict[str, RelationshipLabel] = {
    "avó": RelationshipLabel.AVA,
    "avô": RelationshipLabel.AVO,
    "vovó": RelationshipLabel.AVA,
    "vovô": RelationshipLabel.AVO,
}

_SYNONYMS: dict[str, RelationshipLabel] = {
    **{label.value: label for label in RelationshipLabel},
    "other": RelationshipLabel.OTHER,
    # Portuguese variants
    "esposo": RelationshipLabel.CONJUGE,
    "esposa": RelationshipLabel.CONJUGE,
    "marido": RelationshipLabel.CONJUGE,
    "mulher": RelationshipLabel.CONJUGE,
    "papai": RelationshipLabel.PAI,
    "mamae": RelationshipLabel.MAE,
    # English aliases
    "father": RelationshipLabel.PAI,
    "dad": RelationshipLabel.PAI,
    "mother": RelationshipLabel.MAE,
    "mom": RelationshipLabel.MAE,
    "son": RelationshipLabel.FILHO,
    "daughter": RelationshipLabel.FILHA,
    "brother": RelationshipLabel.IRMAO,
    "sister": RelationshipLabel.IRMA,
    "grandfather": RelationshipLabel.AVO,
    "grandmother": RelationshipLabel.AVA,
    "grandson": RelationshipLabel.NETO,
    "granddaughter": RelationshipLabel.NETA,
    "uncle": RelationshipLabel.TIO,
    "aunt": RelationshipLabel.TIA,
    "nephew": RelationshipLabel.SOBRINHO,
    "niece": RelationshipLabel.SOBRINHA,
    "cousin": RelationshipLabel.PRIMO,
    "spouse": RelationshipLabel.CONJUGE,
    "husband": RelationshipLabel.CONJUGE,
    "wife": RelationshipLabel.CONJUGE,
    "father-in-law": RelationshipLabel.SOGRO,
    "mother-in-law": RelationshipLabel.SOGRA,
    "son-in-law": RelationshipLabel.GENRO,
    "daughter-in-law": RelationshipLabel.NORA,
    "brother-in-law": RelationshipLabel.CUNHADO,
    "sister-in-law": RelationshipLabel.CUNHADA,
    "ancestor": RelationshipLabel.ANCESTRAL,
    "friend": RelationshipLabel.AMIGO,
    "colleague": RelationshipLabel.COLEGA,
}

# Inputs that legitimately mean "other" (not rejected by strict validation)
_EXPLICIT_OTHER = frozenset({"outro", "outra", "other"})


def _fold(text: str) -> str:
    """Lowercase, trim and strip diacritics ("Irmã " -> "irma")."""
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_relationship(value: object) -> RelationshipLabel:
    """Map any stored or user-supplied tag onto the closed vocabulary.

    Total: ``None``, non-strings and unknown text all map to ``OTHER``.
    """
    if isinstance(value, RelationshipLabel):
        return value
    if not isinstance(value, str):
        return RelationshipLabel.OTHER

    lowered = value.strip().lower()
    if lowered in _EXACT_SYNONYMS:
        return _EXACT_SYNONYMS[lowered]

    folded = _fold(lowered)
    if folded in _EXPLICIT_OTHER:
        return RelationshipLabel.OTHER
    return _SYNONYMS.get(folded.replace("_", "-"), RelationshipLabel.OTHER)


def validate_relationship(value: object) -> RelationshipLabel:
    """Strict boundary variant of :func:`normalize_relationship`.

    Raises:
        InvalidRelationshipError: the value does not name a known tag and is
            not an explicit "other"
    """
    label = normalize_relationship(value)
    if label is RelationshipLabel.OTHER and value is not RelationshipLabel.OTHER:
        if not (isinstance(value, str) and _fold(value) in _EXPLICIT_OTHER):
            raise InvalidRelationshipError(value)
    return label


def inverse_relationship(label: RelationshipLabel) -> RelationshipLabel:
    """Best-effort reverse label; ``OTHER`` when no inverse is known."""
    return INVERSE_LABELS.get(label, RelationshipLabel.OTHER)


def display_label(label: RelationshipLabel) -> str:
    return DISPLAY_LABELS[label]
