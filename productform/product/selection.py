from productform.models import Option


class DependentSelectionController:
    """
    Keeps the city selection consistent with the state selection.

    Only cities of a selected state can be selected. With no state
    selected the city field is disabled and its selection is empty.
    """

    def __init__(self, lookup):
        self.lookup = lookup

    def available_cities(self, states):
        """City names selectable for the given state Options."""
        return self.lookup.cities_for(option.value for option in states)

    def city_options(self, states):
        return [Option(city) for city in self.available_cities(states)]

    def is_disabled(self, states):
        return len(states) == 0

    def prune(self, states, cities):
        """
        Splits `cities` into (kept, removed) against the cities available
        for `states`. Order of the kept cities is preserved.
        """
        if self.is_disabled(states):
            return (), tuple(cities)

        available = set(self.available_cities(states))
        kept = tuple(option for option in cities if option.value in available)
        removed = tuple(option for option in cities if option.value not in available)
        return kept, removed
