"""
Tokenizer utilities.

Split command text into delimiter-separated tokens. Quoting is not
supported: token boundaries are purely delimiter based.
"""

DEFAULT_DELIMITER = " "


def tokenize(text: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """
    Split text on runs of the delimiter character.

    Args:
        text: Text to split
        delimiter: Single delimiter character

    Returns:
        Ordered non-empty tokens

    Examples:
        >>> tokenize("cmd  arg1   arg2")
        ['cmd', 'arg1', 'arg2']
        >>> tokenize(",a,,b,", ",")
        ['a', 'b']
        >>> tokenize("   ")
        []
    """
    return [token for token in text.split(delimiter) if token]


def split_remainder(text: str, delimiter: str = DEFAULT_DELIMITER, skip: int = 0) -> str:
    """
    Get the raw text that follows the first ``skip`` tokens.

    Inner spacing of the remainder is preserved; leading and trailing
    delimiters are stripped.

    Args:
        text: Text to scan
        delimiter: Single delimiter character
        skip: Number of tokens to skip

    Returns:
        Remaining text, empty if fewer than ``skip`` + 1 tokens exist

    Examples:
        >>> split_remainder("say  hello   world ", skip=1)
        'hello   world'
        >>> split_remainder("a b", skip=2)
        ''
    """
    position = 0
    length = len(text)
    for _ in range(skip):
        while position < length and text[position] == delimiter:
            position += 1
        while position < length and text[position] != delimiter:
            position += 1
    return text[position:].strip(delimiter)


def split_command(text: str) -> tuple[str, str]:
    """
    Separate the command name from its argument text.

    The command name is always tokenized with the default delimiter.

    Args:
        text: Message content with the prefix already removed

    Returns:
        Tuple of (command_name, arg_text); command_name is empty when
        the text holds no token

    Examples:
        >>> split_command("ban  @user spamming")
        ('ban', '@user spamming')
        >>> split_command("ping")
        ('ping', '')
    """
    tokens = tokenize(text, DEFAULT_DELIMITER)
    if not tokens:
        return "", ""
    return tokens[0], split_remainder(text, DEFAULT_DELIMITER, skip=1)
