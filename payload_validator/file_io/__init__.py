from .source_location import SourceLocation, format_source, lookup_source
