from .payload_parser import PayloadParser, payload_parser
