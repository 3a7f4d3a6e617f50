"""Library for parsing rfc5545 content into a tree of components."""
