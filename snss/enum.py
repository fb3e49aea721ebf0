'''
Constant values used throughout the SNSS format.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import Enum, Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE  = 0
    MAGIC = 1 << 1
    INHERIT = 1 << 2


class CommandType(Enum):
    '''Commands carrying a navigation entry, the only ones decoded further.

    The same serialized entry is used by two different services, with a
    different id in each kind of file.'''
    TAB_RESTORE_NAVIGATION = 1  # "Tabs" files
    SESSION_TAB_NAVIGATION = 6  # "Session" files


class PageTransitionType(Enum):
    '''Core transition, stored in the low byte of the transition value.

    See ui/base/page_transition_types.h in the chromium sources.'''
    LINK              = 0   # clicked a link on another page
    TYPED             = 1   # typed the URL in the omnibar, or selected a suggested URL
    AUTO_BOOKMARK     = 2   # bookmark or similar (like "most visited" suggestions)
    AUTO_SUBFRAME     = 3   # automatic navigation within a sub frame (an embedded ad)
    MANUAL_SUBFRAME   = 4
    GENERATED         = 5   # selected an omnibar suggestion that was not a URL
    START_PAGE        = 6   # start page or URL passed on the command line
    FORM_SUBMIT       = 7
    RELOAD            = 8   # refresh, enter in the address bar or session restore
    KEYWORD           = 9   # keyword search not using the default search provider
    KEYWORD_GENERATED = 10  # the visit to http:// + keyword that goes along with KEYWORD


class PageTransitionQualifier(Flag):
    '''Qualifiers packed in the upper bits of the transition value.'''
    NONE            = 0
    BACK_FORWARD    = 0x01000000
    FROM_ADDRESS_BAR = 0x02000000
    HOME_PAGE       = 0x04000000
    CHAIN_START     = 0x10000000
    CHAIN_END       = 0x20000000
    CLIENT_REDIRECT = 0x40000000
    SERVER_REDIRECT = 0x80000000
