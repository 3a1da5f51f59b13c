# backend/app/services/flight_service.py

from typing import Dict, Optional


class FlightService:
    """
    Flight number -> scheduled arrival time at ICN.

    There is no live flight provider behind this yet; known Korean Air
    numbers are answered from a fixed table and any other KE flight gets
    the carrier's typical afternoon slot.
    """

    KNOWN_ARRIVALS: Dict[str, str] = {
        "KE123": "14:30",
    }
    CARRIER_DEFAULTS: Dict[str, str] = {
        "KE": "15:00",
    }

    def get_arrival_time(self, flight_number: Optional[str]) -> Optional[str]:
        code = (flight_number or "").strip().upper()
        if not code:
            return None

        if code in self.KNOWN_ARRIVALS:
            return self.KNOWN_ARRIVALS[code]

        for carrier, arrival in self.CARRIER_DEFAULTS.items():
            if code.startswith(carrier):
                return arrival

        return None


def get_mock_arrival_time(flight_number: Optional[str]) -> Optional[str]:
    return FlightService().get_arrival_time(flight_number)
