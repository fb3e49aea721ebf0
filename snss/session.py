'''
# SNSS

Format used by chromium based browsers to persist the open windows and tabs
(the "Session" and "Tabs" files in the profile directory) so to restore
them at restart.

The file is a header followed by a log of commands appended one after the
other while the browser is running

    .------.---------.---------------------------------.
    | SNSS | version | length | id | payload | ...     |
    '------'---------'---------------------------------'

where the length is an unsigned 16 bits integer counting the id and the
payload. Only the commands carrying a navigation entry are decoded, the
others are kept as opaque data.

References

 - <https://digitalinvestigation.wordpress.com/tag/snss>
 - components/sessions/core/serialized_navigation_entry.cc in the chromium sources
'''
import logging

from .core import Chunk
from .enum import Compliant, CommandType
from .transition import PageTransitionField
from . import fields


logger = logging.getLogger(__name__)


class SNSSHeader(Chunk):
    magic   = fields.StringField(4, default=b'SNSS', is_magic=True)
    version = fields.StructField('i')


class Tab(Chunk):
    '''Navigation entry of a tab, serialized as a chromium Pickle.

    The first four bytes are the size of the pickle payload and are not used.'''
    pickle_header        = fields.PaddingField(4)
    id                   = fields.StructField('i')  # identifier of the back-forward list
    index                = fields.StructField('i')  # position in the back-forward list
    url                  = fields.PickleStringField()
    title                = fields.PickleString16Field()
    state                = fields.PickleBytesField()
    transition           = PageTransitionField()
    post                 = fields.BooleanField()  # the page has POST data
    referrer_url         = fields.PickleStringField()
    reference_policy     = fields.StructField('i')
    original_request_url = fields.PickleStringField()
    user_agent           = fields.BooleanField()  # the user agent was overridden
    trailer              = fields.PaddingField()

    def __str__(self):
        return f'Tab #{self.id.value}: [{self.title.value}]({self.url.value})'


class Opaque(fields.PaddingField):
    '''Payload of a command that is not decoded.'''


class Command(Chunk):
    id      = fields.StructField('B')
    content = fields.SelectField('id', {
        CommandType.TAB_RESTORE_NAVIGATION.value: Tab(),
        CommandType.SESSION_TAB_NAVIGATION.value: Tab(),
        fields.SelectField.Type.DEFAULT: Opaque(),
    })

    @property
    def is_tab(self):
        return isinstance(self.content.field, Tab)

    @property
    def tab(self):
        return self.content.field if self.is_tab else None


class SNSSFile(Chunk):
    header   = SNSSHeader()
    commands = fields.RecordArrayField(Command(), length_format='H')

    def __init__(self, data=None, compliant=Compliant.MAGIC, **kwargs):
        super().__init__(data, compliant=compliant, **kwargs)

    @property
    def version(self):
        return self.header.version.value

    @property
    def tabs(self):
        return [_.tab for _ in self.commands if _.is_tab]


def parse(data, compliant=Compliant.MAGIC) -> SNSSFile:
    '''Decode the whole content of a SNSS file.

    The data must be the complete file, already read in memory.'''
    snss = SNSSFile(data, compliant=compliant)
    logger.debug('parsed SNSS version %d with %d commands', snss.version, len(snss.commands))

    return snss


def parse_command(data) -> Command:
    '''Decode a single command, the data must be exactly the record without the length prefix.

    It's possible to pass a Stream in order to have offsets relative to the whole file.'''
    return Command(data)


def parse_tab(data) -> Tab:
    '''Decode a navigation entry, i.e. the payload of a command without the id.'''
    return Tab(data)
