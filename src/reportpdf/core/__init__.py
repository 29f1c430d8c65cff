"""Report input models, company profile and report-file loading."""
