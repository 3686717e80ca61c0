"""ctlookup: CDISC controlled terminology codelist lookup against the CDISC Library."""

__version__ = "0.1.0"
