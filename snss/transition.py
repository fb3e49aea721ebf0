'''
# Page transition

Every navigation entry records how the user arrived at the page: a 32 bits
value where the low byte is the core transition type and the upper bits
are qualifiers

     31                    24 23                 8 7            0
    .------------------------.--------------------.--------------.
    | qualifiers             | (unused)           | core type    |
    '------------------------'--------------------'--------------'

The value is stored verbatim while unpacking, the decomposition happens
only on request. See ui/base/page_transition_types.h in the chromium sources.
'''
from dataclasses import dataclass

from bitstring import Bits

from . import fields
from .enum import PageTransitionType, PageTransitionQualifier


@dataclass(frozen=True)
class UnknownPageTransitionType:
    '''Core transition with a value not listed in PageTransitionType.'''
    value: int


@dataclass(frozen=True)
class PageTransitionQualifiers:
    back_forward: bool        # used the back or forward buttons
    address_bar: bool         # used the address bar to trigger the navigation
    homepage: bool            # navigating to the homepage
    chain_start: bool         # beginning of a navigation chain
    redirect_chain_end: bool  # last transition in a redirect chain
    client_redirect: bool     # redirect caused by javascript or a meta refresh
    server_redirect: bool     # redirect caused by the HTTP response


@dataclass(frozen=True)
class PageTransition:
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= 0xffffffff:
            raise ValueError(f'a page transition is an unsigned 32 bits value, not {self.value}')

    def __repr__(self):
        return f'<{self.__class__.__name__}(0x{self.value:08x})>'

    def __int__(self):
        return self.value

    @property
    def bits(self) -> Bits:
        return Bits(uint=self.value, length=32)

    def kind(self):
        '''Returns the PageTransitionType of the low byte or, if it's not a known
        one, an UnknownPageTransitionType carrying the raw byte.'''
        core = self.bits[-8:].uint
        try:
            return PageTransitionType(core)
        except ValueError:
            return UnknownPageTransitionType(core)

    def has(self, qualifier: PageTransitionQualifier) -> bool:
        '''Tell if all the bits of the qualifier are set.'''
        if not qualifier:
            raise ValueError('cannot test an empty qualifier')

        mask = Bits(uint=qualifier.value, length=32)

        return (self.bits & mask) == mask

    def qualifiers(self) -> PageTransitionQualifiers:
        # homepage and the chain/redirect qualifiers are true when their bit is clear
        return PageTransitionQualifiers(
            back_forward=self.has(PageTransitionQualifier.BACK_FORWARD),
            address_bar=self.has(PageTransitionQualifier.FROM_ADDRESS_BAR),
            homepage=not self.has(PageTransitionQualifier.HOME_PAGE),
            chain_start=not self.has(PageTransitionQualifier.CHAIN_START),
            redirect_chain_end=not self.has(PageTransitionQualifier.CHAIN_END),
            client_redirect=not self.has(PageTransitionQualifier.CLIENT_REDIRECT),
            server_redirect=not self.has(PageTransitionQualifier.SERVER_REDIRECT),
        )


class PageTransitionField(fields.StructField):
    '''Unsigned 32 bits integer unpacked as a PageTransition.'''

    def __init__(self, **kw):
        super().__init__('I', default=PageTransition(0), **kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def _convert(self, value):
        return PageTransition(value)
