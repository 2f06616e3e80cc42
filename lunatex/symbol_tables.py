# lunatex/symbol_tables.py
"""
Command vocabulary for the TI-Nspire charset.

The handheld font renders lowercase Greek, the common operators and relations,
but shows blank rectangles for uppercase Greek, most arrows and the big
operators. Those classes map to ASCII words instead.
"""
from types import MappingProxyType
from typing import Dict, Mapping

from .schemas import AsciiWord, ConversionRule, UnicodeGlyph


def _glyphs(mapping: Dict[str, str]) -> Mapping[str, ConversionRule]:
    return MappingProxyType({name: UnicodeGlyph(code_point=ord(char)) for name, char in mapping.items()})


def _words(mapping: Dict[str, str]) -> Mapping[str, ConversionRule]:
    return MappingProxyType({name: AsciiWord(text=word) for name, word in mapping.items()})


# --- Symbol classes ---
LOWERCASE_GREEK = _glyphs({
    'alpha': 'α', 'beta': 'β', 'gamma': 'γ', 'delta': 'δ', 'epsilon': 'ε', 'varepsilon': 'ε',
    'zeta': 'ζ', 'eta': 'η', 'theta': 'θ', 'vartheta': 'ϑ', 'iota': 'ι', 'kappa': 'κ',
    'lambda': 'λ', 'mu': 'μ', 'nu': 'ν', 'xi': 'ξ', 'pi': 'π', 'varpi': 'ϖ', 'rho': 'ρ',
    'varrho': 'ϱ', 'sigma': 'σ', 'varsigma': 'ς', 'tau': 'τ', 'upsilon': 'υ', 'phi': 'φ',
    'varphi': 'ϕ', 'chi': 'χ', 'psi': 'ψ', 'omega': 'ω',
})
UPPERCASE_GREEK = _words({
    'Gamma': 'Gamma', 'Delta': 'Delta', 'Theta': 'Theta', 'Lambda': 'Lambda', 'Xi': 'Xi',
    'Pi': 'Pi', 'Sigma': 'Sigma', 'Upsilon': 'Upsilon', 'Phi': 'Phi', 'Psi': 'Psi', 'Omega': 'Omega',
})
BINARY_OPERATORS = _glyphs({
    'times': '×', 'div': '÷', 'cdot': '·', 'pm': '±', 'mp': '∓', 'ast': '∗', 'star': '⋆',
    'circ': '∘', 'bullet': '•',
})
RELATIONAL_OPERATORS = _glyphs({
    'leq': '≤', 'le': '≤', 'geq': '≥', 'ge': '≥', 'neq': '≠', 'ne': '≠', 'approx': '≈',
    'equiv': '≡', 'sim': '∼', 'simeq': '≃', 'cong': '≅', 'propto': '∝', 'll': '≪', 'gg': '≫',
})
SET_RELATIONS = _words({
    'subset': '<', 'supset': '>', 'subseteq': '<=', 'supseteq': '>=', 'in': 'in',
    'notin': 'not in', 'ni': 'ni', 'perp': '_|_', 'parallel': '||',
})
ARROWS = _words({
    'leftarrow': '<-', 'rightarrow': '->', 'to': '->', 'uparrow': '^', 'downarrow': 'v',
    'leftrightarrow': '<->', 'Leftarrow': '<=', 'Rightarrow': '=>', 'implies': '=>',
    'Leftrightarrow': '<=>', 'iff': '<=>', 'mapsto': '|->',
})
BIG_OPERATORS = _words({
    'sum': 'SUM', 'prod': 'PROD', 'coprod': 'COPROD', 'int': 'INT', 'oint': 'OINT',
    'iint': 'IINT', 'iiint': 'IIINT', 'bigcup': 'UNION', 'bigcap': 'INTERSECT',
    'bigoplus': 'OPLUS', 'bigotimes': 'OTIMES',
})
QUANTIFIERS = _words({'forall': 'forall', 'exists': 'exists', 'nexists': '!exists'})
LOGIC = _words({'neg': 'NOT', 'lnot': 'NOT', 'land': 'AND', 'wedge': 'AND', 'lor': 'OR', 'vee': 'OR'})
NAMED_SYMBOLS = _words({
    'infty': 'inf', 'partial': 'd', 'nabla': 'nabla', 'emptyset': '{}', 'varnothing': '{}',
    'cap': 'n', 'cup': 'U', 'setminus': '\\', 'angle': '<', 'triangle': '^', 'square': '[]',
    'diamond': '<>', 'clubsuit': 'club', 'diamondsuit': 'diamond', 'heartsuit': 'heart',
    'spadesuit': 'spade', 'aleph': 'aleph', 'wp': 'P', 'Re': 'Re', 'Im': 'Im', 'hbar': 'hbar',
    'ell': 'l', 'prime': "'", 'degree': 'deg', 'deg': 'deg',
})
ROOTS = _glyphs({'sqrt': '√', 'cbrt': '∛'})
VULGAR_FRACTIONS = _glyphs({
    'frac12': '½', 'frac13': '⅓', 'frac23': '⅔', 'frac14': '¼', 'frac34': '¾', 'frac15': '⅕',
    'frac25': '⅖', 'frac35': '⅗', 'frac45': '⅘', 'frac16': '⅙', 'frac56': '⅚', 'frac18': '⅛',
    'frac38': '⅜', 'frac58': '⅝', 'frac78': '⅞',
})
SPACING = _words({',': ' ', ';': ' ', ':': ' ', '!': '', 'quad': '  ', 'qquad': '    '})
DOTS = _glyphs({'ldots': '…', 'cdots': '⋯', 'vdots': '⋮', 'ddots': '⋱'})
DELIMITERS = MappingProxyType({
    **_glyphs({'langle': '⟨', 'rangle': '⟩', 'lceil': '⌈', 'rceil': '⌉', 'lfloor': '⌊',
               'rfloor': '⌋', '|': '‖', 'lVert': '‖', 'rVert': '‖'}),
    **_words({'lvert': '|', 'rvert': '|'}),
})

SYMBOL_CLASSES: Mapping[str, Mapping[str, ConversionRule]] = MappingProxyType({
    'lowercase_greek': LOWERCASE_GREEK,
    'uppercase_greek': UPPERCASE_GREEK,
    'binary_operators': BINARY_OPERATORS,
    'relational_operators': RELATIONAL_OPERATORS,
    'set_relations': SET_RELATIONS,
    'arrows': ARROWS,
    'big_operators': BIG_OPERATORS,
    'quantifiers': QUANTIFIERS,
    'logic': LOGIC,
    'named_symbols': NAMED_SYMBOLS,
    'roots': ROOTS,
    'vulgar_fractions': VULGAR_FRACTIONS,
    'spacing': SPACING,
    'dots': DOTS,
    'delimiters': DELIMITERS,
})


def _merge_tables(classes: Mapping[str, Mapping[str, ConversionRule]]) -> Mapping[str, ConversionRule]:
    merged: Dict[str, ConversionRule] = {}
    for class_name, table in classes.items():
        for name, rule in table.items():
            if name in merged:
                raise ValueError(f"Command '{name}' is declared twice (second time in '{class_name}').")
            merged[name] = rule
    return MappingProxyType(merged)


SYMBOL_TABLE = _merge_tables(SYMBOL_CLASSES)

# \frac12 style commands: the prefix is alphabetic, the two digits are not.
FRACTION_PREFIX = 'frac'

# --- Script tables, restricted to the representable set ---
SCRIPT_CHARSET = '0123456789+-=()nixy'

SUPERSCRIPTS: Mapping[str, str] = MappingProxyType(
    dict(zip(SCRIPT_CHARSET, '⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ⁿⁱˣʸ', strict=True))
)
# Unicode has no LATIN SUBSCRIPT SMALL LETTER Y. U+1D67 is GREEK SUBSCRIPT SMALL
# LETTER GAMMA, used as the closest-looking stand-in.
SUBSCRIPTS: Mapping[str, str] = MappingProxyType(
    dict(zip(SCRIPT_CHARSET, '₀₁₂₃₄₅₆₇₈₉₊₋₌₍₎ₙᵢₓᵧ', strict=True))
)
