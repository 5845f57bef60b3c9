"""Top-level package for the journey search core.

Turns free-text location input into city or station references through
a phonetic prefix index, and turns a batch of direct or transfer train
itineraries into a faceted, filtered and ordered result list.

Quick start:
    >>> from journey_search.container import Container
    >>> from journey_search.services import SearchSession
    >>> session = Container.create_default().resolve(SearchSession)
    >>> session.departure_text, session.arrival_text = "北京", "上海虹桥站"
    >>> outcome = session.search_safe()
"""

__version__ = "0.1.0"
