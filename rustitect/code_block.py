"""Utility for generating code blocks in the supported markup dialects."""


def md_codeblock(lang: str, code: str) -> str:
    """Generate a Markdown code block."""
    return f"""```{lang}
{code.rstrip()}
```"""


def adoc_codeblock(lang: str, code: str) -> str:
    """Generate an AsciiDoc source listing block."""
    return f"""[source,{lang}]
----
{code.rstrip()}
----"""
