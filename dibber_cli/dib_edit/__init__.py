"""dib-edit: generate row mutations from editable queries."""
