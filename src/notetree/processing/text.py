from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_CR_LF = re.compile(r"\r\n")


class TextNormalizer:
    """
    Applies the configured line-ending policy to raw document text.

    With `cr_to_space`, each CRLF becomes LF followed by a space, so character offsets into the
    original file still line up. Otherwise, when `keep_cr` is off, CRLF collapses to LF. Lone CR
    characters are never touched. Non-empty output always ends with LF.
    """

    def __init__(self, keep_cr: bool = True, cr_to_space: bool = False):
        self.keep_cr = keep_cr
        self.cr_to_space = cr_to_space

    def normalize(self, text: str) -> str:
        text = self._handle_cr(text)
        if text and not text.endswith("\n"):
            # A trailing lone CR plus the appended LF forms a new CRLF pair.
            text = self._handle_cr(text + "\n")
            if not text.endswith("\n"):
                text += "\n"
        return text

    def _handle_cr(self, text: str) -> str:
        if not text or "\r" not in text:
            return text
        if self.cr_to_space:
            logger.debug("Replacing Carriage-Return characters with spaces ...")
            return _CR_LF.sub("\n ", text)
        if not self.keep_cr:
            logger.debug("Removing Carriage-Return characters ...")
            return _CR_LF.sub("\n", text)
        return text


def normalize_text(text: str, keep_cr: bool = True, cr_to_space: bool = False) -> str:
    return TextNormalizer(keep_cr=keep_cr, cr_to_space=cr_to_space).normalize(text)
