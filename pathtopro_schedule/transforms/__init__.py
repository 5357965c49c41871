"""
Transforms sub-package for pathtopro-schedule.

Steps applied to the raw rows after parsing:

- timezones.py: Resolve row date/time text into aware datetimes
  (``TimeResolver``, ``ResolvedRecord``).
- ordering.py: Stable chronological sort.
- pipeline.py: ``SchedulePipeline`` runs navigation, parsing, resolution
  and ordering in sequence.
"""
