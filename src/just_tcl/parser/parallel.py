"""Background lexing.

A producer thread runs a lexer ahead of the parser and hands tokens over
through a bounded queue. Parsing results are identical to lexing in the
parser's own thread.
"""

import queue
import threading
from typing import Optional

from .lexer import BaseLexer, Token, TokenType

# Capacity of the token queue between lexer and parser
MAX_QUEUED_TOKENS = 100


class ParallelLexer:
    """Token source that lexes on a worker thread.

    The worker stops after pushing the first EOF token. Once the consumer
    has received that EOF, further calls return EOF without touching the
    queue.
    """

    def __init__(self, lexer: BaseLexer, maxsize: int = MAX_QUEUED_TOKENS):
        self.lexer = lexer
        self._queue: "queue.Queue[Token]" = queue.Queue(maxsize=maxsize)
        self._eof: Optional[Token] = None
        self._thread = threading.Thread(target=self._produce, name="tcl-lexer", daemon=True)
        self._thread.start()

    def _produce(self) -> None:
        while True:
            token = self.lexer.next_token()
            self._queue.put(token)
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        if self._eof is not None:
            return self._eof
        token = self._queue.get()
        if token.type == TokenType.EOF:
            self._eof = token
        return token

    def close(self) -> None:
        """Drain the queue so the worker can finish, then join it."""
        while self._eof is None:
            self.next_token()
        self._thread.join()
