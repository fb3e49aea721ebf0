import struct

import pytest


URL_GRAPHS = 'https://console.hetzner.cloud/projects/3687808/servers/64199561/graphs'
URL_BACKUP = 'https://console.hetzner.cloud/projects/3687808/servers/64199561/backup'
URL_LOADBALANCERS = 'https://console.hetzner.cloud/projects/3687808/servers/64199561/loadbalancers'
REFERRER = 'https://console.hetzner.cloud/'
TITLE = 'primary · Hetzner Cloud'

# RELOAD without any qualifier bit set
TRANSITION_RELOAD = 0x00000008


class SNSSBuilder:
    '''Build the binary representation of SNSS files for testing purpose.'''

    URL_GRAPHS = URL_GRAPHS
    URL_BACKUP = URL_BACKUP
    URL_LOADBALANCERS = URL_LOADBALANCERS
    REFERRER = REFERRER
    TITLE = TITLE

    @staticmethod
    def pad(data):
        return data + b'\x00' * (-len(data) % 4)

    @classmethod
    def pickle_bytes(cls, data, length=None):
        return struct.pack('<I', len(data) if length is None else length) + cls.pad(data)

    @classmethod
    def pickle_string(cls, value):
        return cls.pickle_bytes(value.encode('utf-8'))

    @classmethod
    def pickle_string16(cls, value):
        data = value.encode('utf-16-le')
        return cls.pickle_bytes(data, length=len(data) // 2)

    @staticmethod
    def header(version=3, magic=b'SNSS'):
        return magic + struct.pack('<i', version)

    @staticmethod
    def record(command_id, payload):
        return struct.pack('<HB', len(payload) + 1, command_id) + payload

    @classmethod
    def tab(cls, id=1994883225, index=0, url=URL_GRAPHS, title=TITLE, state=b'',
            transition=TRANSITION_RELOAD, post=0, referrer_url=REFERRER, reference_policy=2,
            original_request_url=URL_BACKUP, user_agent=0, trailer=b''):
        body = (
            struct.pack('<ii', id, index) +
            cls.pickle_string(url) +
            cls.pickle_string16(title) +
            cls.pickle_bytes(state) +
            struct.pack('<Ii', transition, post) +
            cls.pickle_string(referrer_url) +
            struct.pack('<i', reference_policy) +
            cls.pickle_string(original_request_url) +
            struct.pack('<i', user_agent) +
            trailer
        )

        return struct.pack('<I', len(body)) + body

    @classmethod
    def session(cls, records, version=3):
        return cls.header(version=version) + b''.join(records)


@pytest.fixture
def builder():
    return SNSSBuilder


@pytest.fixture
def session_records(builder):
    '''The three records of a "Session" file: an opaque command and two navigations.'''
    return [
        builder.record(14, bytes(range(24))),
        builder.record(6, builder.tab(
            index=0,
            url=URL_GRAPHS,
            state=b'\x01\x02\x03\x04\x05',
            original_request_url=URL_BACKUP,
            trailer=b'\xaa' * 8,
        )),
        builder.record(6, builder.tab(
            index=1,
            url=URL_LOADBALANCERS,
            state=b'\x06' * 16,
            original_request_url=URL_GRAPHS,
        )),
    ]


@pytest.fixture
def session_data(builder, session_records):
    return builder.session(session_records)
