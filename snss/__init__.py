"""
# SNSS file format reader.

Read-only decoding of the "Session" and "Tabs" files that chromium based
browsers use to restore the open tabs, for example

    with open('Session', 'rb') as f:
        session = snss.parse(f.read())

    for tab in session.tabs:
        print(f'Tab #{tab.id.value}: [{tab.title.value}]({tab.url.value})')

The format is described declaratively: a Chunk is an ordered composition of
Fields, each one knowing how many bytes it needs to read from the stream in
order to build its value. After unpacking every component knows its absolute
offset and its size inside the original data.

Any problem found while decoding stops the parsing raising a subclass of
SNSSException that carries the offset of the offending data and the chain
of the fields that were being decoded.
"""
from .enum import Compliant, CommandType, PageTransitionType, PageTransitionQualifier
from .exceptions import SNSSException, BadMagic, Truncated, InvalidText
from .session import (
    SNSSFile,
    SNSSHeader,
    Command,
    Tab,
    Opaque,
    parse,
    parse_command,
    parse_tab,
)
from .transition import PageTransition, PageTransitionQualifiers, UnknownPageTransitionType
