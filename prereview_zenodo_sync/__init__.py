"""Report which PREreview full reviews have Zenodo records that need updating."""
