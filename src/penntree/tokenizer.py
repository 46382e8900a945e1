"""
    penntree: Penn Treebank trees for Python

    Tokenizer module

    Copyright (C) 2021 Miðeind ehf.

    This software is licensed under the MIT License:

        Permission is hereby granted, free of charge, to any person
        obtaining a copy of this software and associated documentation
        files (the "Software"), to deal in the Software without restriction,
        including without limitation the rights to use, copy, modify, merge,
        publish, distribute, sublicense, and/or sell copies of the Software,
        and to permit persons to whom the Software is furnished to do so,
        subject to the following conditions:

        The above copyright notice and this permission notice shall be
        included in all copies or substantial portions of the Software.

        THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
        EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
        MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
        IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
        CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
        TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
        SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

    This module splits a stream of bytes in bracketed treebank notation
    into tokens of three kinds: an opening parenthesis, a closing
    parenthesis, and a word, i.e. a maximal run of bytes that are
    neither whitespace nor parentheses. Each token records the byte
    offset where it starts. Words are kept as raw bytes; decoding them
    is up to the caller.

    The tokenizer supports one token of lookahead via peek(). Reaching
    the end of the input raises EOFError; errors from the underlying
    stream (OSError) are propagated unchanged. A peek() that raised an
    exception raises the same exception object again when repeated
    or followed by next().

"""

from typing import BinaryIO, NamedTuple, Optional

from enum import IntEnum


# Bytes that separate tokens without being part of one
WHITESPACE = frozenset(b" \t\n")
OPEN_PAREN = ord("(")
CLOSE_PAREN = ord(")")
# Bytes that end a word token
WORD_TERMINATORS = WHITESPACE | {OPEN_PAREN, CLOSE_PAREN}

# Number of bytes to read from the stream at a time
READ_SIZE = 64 * 1024


class TokenKind(IntEnum):
    OPEN = 0
    CLOSE = 1
    WORD = 2


class Token(NamedTuple):
    kind: TokenKind
    text: bytes
    # Byte offset of the first byte of the token in the stream
    offset: int


class Tokenizer:

    """Tokenizes bytes from a binary stream with one token of lookahead"""

    def __init__(self, stream: BinaryIO, read_size: int = READ_SIZE) -> None:
        self._stream = stream
        self._read_size = read_size
        self._buf = b""
        self._pos = 0
        # Number of bytes consumed from the stream before the current buffer
        self._offset = 0
        self._eof = False
        # The lookahead token, or the exception raised while looking ahead
        self._peeked: Optional[Token] = None
        self._peek_error: Optional[BaseException] = None

    @property
    def offset(self) -> int:
        """The byte offset of the next unread byte in the stream"""
        return self._offset + self._pos

    def _fill(self) -> bool:
        """Read more bytes into the buffer; return False at end of input"""
        if self._eof:
            return False
        data = self._stream.read(self._read_size)
        if not data:
            self._eof = True
            return False
        self._offset += len(self._buf)
        self._buf = data
        self._pos = 0
        return True

    def _scan(self) -> Token:
        """Scan the next token from the stream"""
        # Skip whitespace
        while True:
            if self._pos >= len(self._buf) and not self._fill():
                raise EOFError("End of treebank input")
            c = self._buf[self._pos]
            if c not in WHITESPACE:
                break
            self._pos += 1
        start_offset = self.offset
        if c == OPEN_PAREN:
            self._pos += 1
            return Token(TokenKind.OPEN, b"(", start_offset)
        if c == CLOSE_PAREN:
            self._pos += 1
            return Token(TokenKind.CLOSE, b")", start_offset)
        # A word: continue until whitespace, a parenthesis or end of input
        word = bytearray()
        while True:
            buf = self._buf
            start = p = self._pos
            end = len(buf)
            while p < end and buf[p] not in WORD_TERMINATORS:
                p += 1
            word += buf[start:p]
            self._pos = p
            if p < end or not self._fill():
                # Found a terminator, or the input ended after the word;
                # in the latter case EOFError is raised by the next scan
                break
        return Token(TokenKind.WORD, bytes(word), start_offset)

    def peek(self) -> Token:
        """Return the next token without consuming it"""
        if self._peek_error is not None:
            raise self._peek_error
        if self._peeked is None:
            try:
                self._peeked = self._scan()
            except (EOFError, OSError) as e:
                self._peek_error = e
                raise
        return self._peeked

    def next(self) -> Token:
        """Consume and return the next token"""
        if self._peek_error is not None:
            e, self._peek_error = self._peek_error, None
            raise e
        if self._peeked is not None:
            tok, self._peeked = self._peeked, None
            return tok
        return self._scan()
