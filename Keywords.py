"""Lexical data for Scallop, the Datalog dialect DatalogPad edits.

Static lists only: the highlighter turns them into patterns and the
indentation engine reads the comment and rule-marker tokens.
"""

from typing import Final, Tuple

LANGUAGE_NAME: Final[str] = "Scallop"

# Ключевые слова, открывающие объявление
DECLARATIONS: Final[Tuple[str, ...]] = ("import", "type", "const", "rel", "relation", "query")

# Relation declarations name the relation right after one of these
RELATION_DECLARATIONS: Final[Tuple[str, ...]] = ("rel", "relation")
TYPE_DECLARATION: Final[str] = "type"

CONNECTIVES: Final[Tuple[str, ...]] = ("and", "or")

KEYWORDS: Final[Tuple[str, ...]] = CONNECTIVES + (
	"not",
	"implies",
	"where",
	"if",
	"then",
	"else",
	"exists",
	"forall",
	"in",
	"from",
	"case",
	"is",
	"as",
	"new",
)

AGGREGATORS: Final[Tuple[str, ...]] = (
	"count",
	"sum",
	"prod",
	"min",
	"max",
	"argmin",
	"argmax",
	"unique",
	"top",
	"categorical",
	"uniform",
)

CONSTANTS: Final[Tuple[str, ...]] = ("true", "false")

TYPES: Final[Tuple[str, ...]] = (
	"i8",
	"i16",
	"i32",
	"i64",
	"i128",
	"isize",
	"u8",
	"u16",
	"u32",
	"u64",
	"u128",
	"usize",
	"f32",
	"f64",
	"char",
	"bool",
	"String",
	"Symbol",
	"DateTime",
	"Duration",
	"Entity",
	"Tensor",
)

RULE_MARKERS: Final[Tuple[str, ...]] = (":-", "<-")
SUBTYPE_MARKER: Final[str] = "<:"

# Longest first, so that "<=" wins over "<"
OPERATORS: Final[Tuple[str, ...]] = (
	":-",
	"<-",
	"<:",
	"::",
	":=",
	"=>",
	"==",
	"!=",
	"<=",
	">=",
	"&&",
	"||",
	"=",
	"<",
	">",
	"+",
	"-",
	"*",
	"/",
	"%",
	"^",
	"!",
)

LINE_COMMENT: Final[str] = "//"
BLOCK_COMMENT_START: Final[str] = "/*"
BLOCK_COMMENT_END: Final[str] = "*/"

OPEN_BRACKETS: Final[str] = "([{"
CLOSE_BRACKETS: Final[str] = ")]}"

FILE_PATTERNS: Final[Tuple[str, ...]] = ("*.scl",)
