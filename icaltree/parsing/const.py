"""Constants for icaltree parsing library."""

# Related to rfc5545 text parsing
FOLD_LEN = 75
FOLD_INDENT = " "
WSP = (" ", "\t")
LINE_TERMINATORS = ("\r\n", "\n")
ATTR_BEGIN = "BEGIN"
ATTR_END = "END"

# Name of the synthetic component that holds all top level components
ATTR_STREAM = "stream"

QUOTE = '"'
NAME_DELIMITERS = (";", ":")
PARAM_DELIMITERS = (",", ";", ":")
PARAM_NAME_VALUE_SEP = "="
