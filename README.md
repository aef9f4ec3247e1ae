# uaparser

Parse user-agent strings into browser, operating system and device
information, using a YAML table of regular expressions with the sections
`user_agent_parsers`, `os_parsers` and `device_parsers`.

Before any expression is tried, the mandatory literal snippets of every
expression are indexed. For an input string, only the expressions whose
snippets all occur in it are run, in table order, and the first match wins.

## Installation

```
pip install .
```

To run the tests: `pip install .[test]` and then `pytest`.

## Usage

```python
from uaparser.parser import UserAgentParser

parser = UserAgentParser("regexes.yml")

ua = parser.parse(
    "Mozilla/5.0 (iPhone; CPU iPhone OS 5_1_1 like Mac OS X) "
    "AppleWebKit/534.46 (KHTML, like Gecko) Version/5.1 "
    "Mobile/9B206 Safari/7534.48.3"
)

ua.browser.family            # "Mobile Safari"
ua.browser.version_string()  # "5.1.0"
str(ua.browser)              # "Mobile Safari 5.1.0"
ua.os.family                 # "iOS"
ua.device.family             # "iPhone"
ua.full_string()             # "Mobile Safari 5.1.0/iOS 5.1.1"
ua.is_spider()               # False
```

(The values above depend on the rule table you load.)

### Loading the rule table

The argument to `UserAgentParser` is opened as a file when it is a path object
(such as `pathlib.Path`) or a string ending in `.yml`. Any other string,
including one ending in `.yaml`, is taken as the YAML text itself; pass a
`pathlib.Path` to read such a file.

Recognised keys per entry:

- `user_agent_parsers`: `regex`, `family_replacement`, `v1_replacement`,
  `v2_replacement`, `v3_replacement`
- `os_parsers`: `regex`, `os_replacement`, `os_v1_replacement`,
  `os_v2_replacement`, `os_v3_replacement`
- `device_parsers`: `regex`, `regex_flag` (`i` for case-insensitive),
  `device_replacement`, `brand_replacement`, `model_replacement`

Replacements may use `$0` to `$9` for captured groups. Expressions are
compiled with Python's `re` module; one that does not compile never matches.
A document that is not a mapping, a section that is not a list, or an entry
that does not map strings to strings raises `ValueError`.

### Results

`parse` returns a `UserAgent` holding `device`, `os` and `browser`;
`parse_device`, `parse_os` and `parse_browser` give each part on its own.
An `Agent` (browser or OS) carries `family`, `major`, `minor`, `patch` and
`patch_minor`; a `Device` carries `family`, `brand` and `model`. When no rule
matches, the family is `"Other"` and the other fields are empty strings.

### Device class

`UserAgentParser.device_type(ua)` classifies a string with a pair of built-in
expressions and needs no rule table. It returns `DeviceType.TABLET`,
`DeviceType.MOBILE` or `DeviceType.DESKTOP`.

### Building blocks

- `uaparser.expander.expand_alternatives` expands mandatory alternatives of an
  expression into every combination.
- `uaparser.snippets.SnippetIndex` and `SnippetMapping` index the mandatory
  snippets of expressions and find the candidate expressions for a string.
- `uaparser.pattern.Pattern`, `Match` and `ReplaceTemplate` do the matching and
  `$N` substitution.

## Benchmark

```
uaparser-bench regexes.yml useragents.txt 1000
```

This loads the rule table, then parses every line of the input file the given
number of times. With the wrong number of arguments it prints a usage line and
exits with status 1.

## What it does not do

The package ships no rule table; you supply your own YAML file. Apart from the
benchmark there is no command-line tool: parsing is done from Python code.