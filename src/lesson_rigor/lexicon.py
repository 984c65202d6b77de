"""
Lexicon -- the fixed pattern tables every detector reads from.

Tables are plain module-level data (Portuguese for the deployed locale, plus
English equivalents), compiled once into DEFAULT_LEXICON at import time.
Detectors receive a Lexicon instance instead of reaching for the tables
directly, so tests can inject a handful of short patterns.

Families:
  - behaviors:      sarcasm, disengagement, public_shame, exclusion, aggression
  - topics:         bullying, digital_safety, respect, inclusion, citizenship
  - constructive:   prevention, responsibility, reporting
  - inclusion_gaps: students missing or asleep
  - bullying_types: Lei 13.185 Art. 2 typology (mentioned as lesson content)
  - preventive / punitive: approach cues
  - obligations:    Lei 13.185 Art. 4 school obligations
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import BEHAVIOR_CATEGORIES

PatternTable = Mapping[str, tuple[re.Pattern, ...]]

FLAGS = re.IGNORECASE

# =============================================================================
# BEHAVIOR PATTERNS
# =============================================================================

BEHAVIOR_PATTERNS: dict[str, list[str]] = {
    "sarcasm": [
        # Dismissive questions
        r"\bsó\s+\w+\s*\?",
        r"\be\s+só\s+isso\s*\?",
        r"\bvocê\s+acha\s+que\s+[^.?!\n]*\s+né\s*\?",
        r"\bonly\s+you\b[^.?!\n]*\?",
        r"\bonly\s+\w+\s*\?",
        r"\bis\s+that\s+all\s*\?",
        # Habitual criticism
        r"\bvocê\s+tem\s+(?:essa\s+)?mania\b",
        r"\bvocê\s+sempre\s+faz\s+isso\b",
        r"\bsempre\s+a\s+mesma\s+coisa\b",
        r"\byou\s+always\s+do\s+this\b",
        r"\balways\s+the\s+same\s+thing\b",
        # Mock agreement and rhetorical dismissal
        r"\bclaro,?\s+né\b",
        r"\bóbvio,?\s+né\b",
        r"\bque\s+surpresa\b",
        r"\bah,?\s+tá\s+bom\b",
        r"\bparabéns,?\s+hein\b",
        r"\bmuito\s+bem,?\s+hein\b",
        r"\bwhat\s+a\s+surprise\b",
        r"\byeah,?\s+right\b",
        r"\bwell\s+done,?\s+genius\b",
        # Derogatory comparison and exasperation
        r"\baté\s+(?:criança|bebê)\s+(?:sabe|consegue)\b",
        r"\beven\s+a\s+(?:baby|child)\s+(?:knows|can)\b",
        r"\bquantas\s+vezes\s+(?:eu\s+)?(?:já\s+)?disse\b",
        r"\bhow\s+many\s+times\s+(?:have\s+)?I\s+(?:told|said)\b",
    ],
    "disengagement": [
        # Sleeping
        r"\b\w+\s+(?:dormiu|está\s+dormindo|dorme\s+de\s+novo)\b",
        r"\bacorda(?:r)?\s+(?:o\s+|a\s+)?\w+",
        r"\b(?:is|was|fell)\s+asleep\b",
        r"\bkeeps\s+sleeping\b",
        # Missing students
        r"\bcadê\s+(?:o\s+|a\s+)?\w+",
        r"\bnão\s+sei\s+onde\s+(?:ele\s+|ela\s+)?está\b",
        r"\b\w+\s+sumiu\b",
        r"\bsaiu\s+sem\s+(?:pedir|avisar)\b",
        r"\bcan(?:'|no)t\s+find\s+(?:this|that)\s+student\b",
        r"\bI\s+don'?t\s+know\s+where\s+\w+\s+is\b",
        # Silence and refusal
        r"\bninguém\s+(?:responde|fala)\b",
        r"\bsilêncio\s+total\b",
        r"\bnão\s+quer\s+(?:participar|fazer|falar)\b",
        r"\bnobody\s+(?:answers|is\s+answering)\b",
        r"\bdead\s+silence\b",
        r"\b(?:doesn'?t|does\s+not)\s+want\s+to\s+participate\b",
        # Boredom and distraction
        r"\bque\s+(?:saco|chato)\b",
        r"\b(?:mexendo|brincando)\s+(?:no|com\s+o)\s+(?:celular|telefone)\b",
        r"\bpara\s+de\s+mexer\s+no\s+celular\b",
        r"\bstop\s+playing\s+(?:with|on)\s+(?:your|the)\s+phone\b",
        r"\bthis\s+is\s+(?:so\s+)?boring\b",
    ],
    "public_shame": [
        r"\b(?:olha|veja)\s+o\s+que\s+(?:o\s+|a\s+)?\w+\s+fez\b",
        r"\btodo\s+mundo\s+(?:sabe|viu|ouviu)\b",
        r"\bna\s+frente\s+de\s+todo\s+mundo\b",
        r"\btodo\s+mundo\s+acertou\s+menos\b",
        r"\bsó\s+você\s+(?:não|errou)\b",
        r"\bclasse,?\s+(?:olha|veja)\s+(?:o|a)\s+\w+",
        r"\b(?:errou|errado)\s+de\s+novo\b",
        r"\bpode\s+rir\b",
        r"\b(?:perfume|cheirou|fedeu|fedendo)\b",
        r"\(risos\)",
        r"\b(?:everyone|everybody|class),?\s+look\s+at\s+(?:what\s+)?\w+",
        r"\bin\s+front\s+of\s+(?:everyone|everybody|the\s+whole\s+class)\b",
        r"\beveryone\s+got\s+it\s+right\s+except\b",
        r"\bonly\s+you\s+(?:didn'?t|did\s+not|got\s+it\s+wrong)\b",
        r"\byou\s+can\s+laugh\s+at\s+(?:him|her|them)\b",
        r"\bwrong\s+again\b",
        r"\bwhat\s+is\s+that\s+smell\b",
        r"\((?:laughter|laughs)\)",
    ],
    "exclusion": [
        r"\b(?:você\s+)?não\s+pode\s+(?:participar|entrar|fazer\s+parte)\b",
        r"\bsai\s+(?:daqui|do\s+grupo)\b",
        r"\bninguém\s+quer\s+(?:você|ela|ele)\b",
        r"\b(?:fica|senta)\s+(?:aí\s+)?sozinh[oa]\b",
        r"\bvai\s+pro\s+canto\b",
        r"\bnão\s+é\s+do\s+(?:grupo|time|nossa\s+turma)\b",
        r"\b(?:nobody|no\s+one)\s+wants\s+(?:you|him|her)\b",
        r"\b(?:nobody|no\s+one)\s+(?:will\s+)?(?:sit|play|work)s?\s+with\s+(?:you|him|her)\b",
        r"\byou\s+can(?:'|no)t\s+(?:join|participate|be\s+part)\b",
        r"\b(?:sit|stay|work)\s+(?:over\s+there\s+)?(?:by\s+yourself|alone)\b",
        r"\bget\s+out\s+of\s+(?:the|this|our)\s+group\b",
        r"\bgo\s+to\s+the\s+corner\b",
    ],
    "aggression": [
        r"\b(?:burro|idiota|imbecil|estúpido)\b",
        r"\b(?:cala|fecha)\s+a\s+boca\b",
        r"\b(?:inútil|incompetente)\b",
        r"\b(?:vou\s+te|você\s+vai)\s+(?:tirar|expulsar)\b",
        r"\b(?:stupid|idiot|moron|useless|incompetent)\b",
        r"\bshut\s+up\b",
        r"\bI'?ll\s+(?:kick|throw)\s+you\s+out\b",
    ],
}

# =============================================================================
# TOPIC PATTERNS
# =============================================================================

TOPIC_PATTERNS: dict[str, list[str]] = {
    "bullying": [
        r"\b(?:cyber)?bullying\b",
        r"\bintimidação\s+sistemática\b",
        r"\blei\s+(?:n[º°o]\.?\s*)?13\.?185\b",
        r"\bagress(?:ão|ões)\b",
        r"\baggression\b",
        r"\bharassment\b",
    ],
    "digital_safety": [
        r"\bcyberbullying\b",
        r"\bprivacy\b",
        r"\b(?:online|internet)\s+safety\b",
        r"\bprivacidade\b",
        r"\bsegurança\s+(?:digital|online|na\s+internet)\b",
        r"\b(?:dados\s+pessoais|personal\s+data)\b",
    ],
    "respect": [
        r"\brespeito\b",
        r"\bempatia\b",
        r"\btolerância\b",
        r"\bconvivência\b",
        r"\brespect\b",
        r"\bempathy\b",
    ],
    "inclusion": [
        r"\binclusão\b",
        r"\bdiversidade\b",
        r"\bacessibilidade\b",
        r"\binclusion\b",
        r"\bdiversity\b",
    ],
    "citizenship": [
        r"\bcidadania\b",
        r"\bdireitos?\s+(?:e\s+)?deveres?\b",
        r"\bcitizenship\b",
        r"\brights\s+and\s+duties\b",
    ],
}

# =============================================================================
# COMPLIANCE PATTERNS
# =============================================================================

CONSTRUCTIVE_PATTERNS: dict[str, list[str]] = {
    "prevention": [
        r"\bprevenção\b",
        r"\bprevenir\b",
        r"\bconscientização\b",
        r"\bprevent(?:ion|ing)?\b",
    ],
    "responsibility": [
        r"\bresponsabilidade\b",
        r"\bresponsabiliz\w*",
        r"\bconsequências\b",
        r"\bresponsibilit(?:y|ies)\b",
        r"\bconsequences\b",
    ],
    "reporting": [
        r"\bdenunci\w*",
        r"\bdenúncia\b",
        r"\bcanal\s+de\s+(?:denúncia|apoio)\b",
        r"\bcontar\s+(?:para|pra)\s+(?:um\s+|uma\s+|o\s+|a\s+)?(?:adulto|professora?|coordenação)\b",
        r"\bdisque\s+100\b",
        r"\breport\s+(?:it|this|bullying|them|to)\b",
        r"\btell\s+(?:a|an|your)\s+(?:teacher|adult|counselor)\b",
        r"\bhelpline\b",
    ],
}

INCLUSION_GAP_PATTERNS: list[str] = [
    r"\bnão\s+sei\s+onde\s+(?:ele\s+|ela\s+)?está\b",
    r"\bcadê\b",
    r"\b(?:dormiu|dormindo)\b",
    r"\bcan(?:'|no)t\s+find\s+(?:this|that)\s+student\b",
    r"\bis\s+asleep\b",
]

BULLYING_TYPE_PATTERNS: dict[str, list[str]] = {
    "Physical": [r"\bbullying\s+físico\b", r"\bphysical\s+bullying\b", r"\b(?:socar|chutar|empurrar|beliscar)\b"],
    "Psychological": [r"\bbullying\s+psicológico\b", r"\bpsychological\s+bullying\b", r"\bhumilhar\b"],
    "Moral": [r"\bbullying\s+moral\b", r"\b(?:difamar|caluniar)\b", r"\brumores?\s+falsos?\b"],
    "Verbal": [r"\bbullying\s+verbal\b", r"\bverbal\s+bullying\b", r"\b(?:insultar|xingar)\b"],
    "Material": [r"\bbullying\s+material\b", r"\bdestruir\s+pertences\b"],
    "Sexual": [r"\bbullying\s+sexual\b", r"\bassédio\s+sexual\b", r"\bsexual\s+harassment\b"],
    "Social": [r"\bbullying\s+social\b", r"\bsocial\s+bullying\b", r"\bexcluir\s+de\s+grupos?\b"],
    "Virtual": [r"\bbullying\s+virtual\b", r"\bmensagens?\s+ofensivas?\b"],
    "Cyberbullying": [r"\bcyberbullying\b", r"\bperfis?\s+falsos?\b", r"\bfake\s+profiles?\b"],
}

PREVENTIVE_PATTERNS: list[str] = [
    r"\bvamos\s+conversar\s+sobre\b",
    r"\bo\s+que\s+(?:vocês\s+)?acham\b",
    r"\bcomo\s+podemos\s+(?:resolver|ajudar)\b",
    r"\b(?:prevenção|prevenir|conscientizar)\b",
    r"\blet'?s\s+(?:talk|discuss)\b",
    r"\bhow\s+can\s+we\s+(?:help|solve)\b",
    r"\bwhat\s+do\s+you\s+think\b",
]

PUNITIVE_PATTERNS: list[str] = [
    r"\b(?:castigo|punição|punir)\b",
    r"\b(?:suspensão|expulsão)\b",
    r"\bvai\s+ser\s+advertido\b",
    r"\b(?:punishment|detention|suspended|expelled)\b",
]

# School obligations under Lei 13.185, Art. 4 (mentioned as lesson content)
OBLIGATION_PATTERNS: dict[str, list[str]] = {
    "prevention_programs": [
        r"\bprogramas?\s+de\s+prevenção\b",
        r"\bprevenção\s+permanente\b",
        r"\bprevention\s+programs?\b",
    ],
    "staff_training": [
        r"\bcapacitação\b",
        r"\btreinamento\b",
        r"\bformação\s+de\s+professores\b",
        r"\b(?:staff|teacher)\s+training\b",
    ],
    "victim_support": [
        r"\bacolh(?:er|imento)\b",
        r"\bapoio\s+às?\s+vítimas?\b",
        r"\bsupport(?:ing)?\s+(?:the\s+)?victims?\b",
    ],
    "aggressor_accountability": [
        r"\bresponsabiliza(?:r|ção)\b",
        r"\bconsequências?\s+para\s+(?:o\s+)?agressor(?:es)?\b",
        r"\bhold(?:ing)?\s+(?:the\s+)?(?:bully|bullies|aggressors?)\s+accountable\b",
    ],
    "educational_campaigns": [
        r"\bcampanhas?\s+educativas?\b",
        r"\bconscientização\b",
        r"\bawareness\s+campaigns?\b",
    ],
    "psychological_assistance": [
        r"\bassistência\s+psicológica\b",
        r"\bapoio\s+psicológico\b",
        r"\bpsicólog[oa]s?\b",
        r"\bpsychological\s+(?:support|assistance)\b",
        r"\bpsychologists?\b",
    ],
    "family_involvement": [
        r"\barticulação\s+com\s+(?:as\s+)?famílias\b",
        r"\benvolver\s+(?:a\s+)?família\b",
        r"\binvolv(?:e|ing)\s+(?:the\s+)?(?:families|family|parents)\b",
    ],
}


# =============================================================================
# LEXICON
# =============================================================================


def _compile(patterns: Iterable[str]) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, FLAGS) for p in patterns)


def _compile_table(table: Mapping[str, Iterable[str]] | None) -> PatternTable:
    return MappingProxyType({name: _compile(pats) for name, pats in (table or {}).items()})


@dataclass(frozen=True)
class Lexicon:
    """Immutable bundle of compiled pattern tables.

    Usage:
        lexicon = Lexicon.build(behaviors={"sarcasm": [r"\\bugh\\b"]})
        BehaviorDetector(lexicon=lexicon).analyze("ugh, again")
    """

    behaviors: PatternTable = field(default_factory=lambda: MappingProxyType({}))
    topics: PatternTable = field(default_factory=lambda: MappingProxyType({}))
    constructive: PatternTable = field(default_factory=lambda: MappingProxyType({}))
    inclusion_gaps: tuple[re.Pattern, ...] = ()
    bullying_types: PatternTable = field(default_factory=lambda: MappingProxyType({}))
    preventive: tuple[re.Pattern, ...] = ()
    punitive: tuple[re.Pattern, ...] = ()
    obligations: PatternTable = field(default_factory=lambda: MappingProxyType({}))
    # Behavior families that count as the teacher practicing bullying
    bullying_practice_families: tuple[str, ...] = BEHAVIOR_CATEGORIES

    @classmethod
    def build(
        cls,
        behaviors: Mapping[str, Iterable[str]] | None = None,
        topics: Mapping[str, Iterable[str]] | None = None,
        constructive: Mapping[str, Iterable[str]] | None = None,
        inclusion_gaps: Iterable[str] = (),
        bullying_types: Mapping[str, Iterable[str]] | None = None,
        preventive: Iterable[str] = (),
        punitive: Iterable[str] = (),
        obligations: Mapping[str, Iterable[str]] | None = None,
        bullying_practice_families: Iterable[str] = BEHAVIOR_CATEGORIES,
    ) -> "Lexicon":
        """Compile raw pattern strings into a Lexicon. Missing tables stay empty."""
        return cls(
            behaviors=_compile_table(behaviors),
            topics=_compile_table(topics),
            constructive=_compile_table(constructive),
            inclusion_gaps=_compile(inclusion_gaps),
            bullying_types=_compile_table(bullying_types),
            preventive=_compile(preventive),
            punitive=_compile(punitive),
            obligations=_compile_table(obligations),
            bullying_practice_families=tuple(bullying_practice_families),
        )

    def behavior(self, category: str) -> tuple[re.Pattern, ...]:
        return self.behaviors.get(category, ())


DEFAULT_LEXICON = Lexicon.build(
    behaviors=BEHAVIOR_PATTERNS,
    topics=TOPIC_PATTERNS,
    constructive=CONSTRUCTIVE_PATTERNS,
    inclusion_gaps=INCLUSION_GAP_PATTERNS,
    bullying_types=BULLYING_TYPE_PATTERNS,
    preventive=PREVENTIVE_PATTERNS,
    punitive=PUNITIVE_PATTERNS,
    obligations=OBLIGATION_PATTERNS,
)


# =============================================================================
# MATCHING HELPERS
# =============================================================================


def find_snippets(text: str, patterns: Iterable[re.Pattern], limit: int | None = None) -> list[str]:
    """Distinct matched substrings across all patterns, by first occurrence."""
    if not text:
        return []
    hits: list[tuple[int, str]] = []
    for pattern in patterns:
        for match in pattern.finditer(text):
            snippet = match.group(0).strip()
            if snippet:
                hits.append((match.start(), snippet))
    hits.sort(key=lambda h: h[0])

    snippets: list[str] = []
    for _, snippet in hits:
        if snippet in snippets:
            continue
        snippets.append(snippet)
        if limit is not None and len(snippets) >= limit:
            break
    return snippets


def any_match(text: str, patterns: Iterable[re.Pattern]) -> bool:
    if not text:
        return False
    return any(p.search(text) for p in patterns)


def count_matching(text: str, patterns: Iterable[re.Pattern]) -> int:
    """Number of patterns (not occurrences) that match somewhere in text."""
    if not text:
        return 0
    return sum(1 for p in patterns if p.search(text))


def matching_names(text: str, table: PatternTable) -> list[str]:
    """Names of table entries with at least one hit, in table order."""
    return [name for name, patterns in table.items() if any_match(text, patterns)]
