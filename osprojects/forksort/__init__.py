"""Sorting fixed-size binary records with coordinator, coach and sorter processes."""