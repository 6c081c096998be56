from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Train(BaseModel):
    model_config = ConfigDict(extra="ignore")

    train_id: str
    train_no: str = ""
    # files = cotxes, columnes = seients; 0 lliure, 1 reservat
    seats: List[List[int]] = Field(default_factory=list)
    station_times: Dict[str, str] = Field(default_factory=dict)
    stations: List[str] = Field(default_factory=list)

    def station_index(self, name: str) -> int:
        """Position of `name` in the route, ignoring case, or -1."""
        wanted = name.strip().lower()
        for index, station in enumerate(self.stations):
            if station.lower() == wanted:
                return index
        return -1

    def serves(self, source: str, destination: str) -> bool:
        source_index = self.station_index(source)
        destination_index = self.station_index(destination)
        return source_index != -1 and destination_index != -1 and source_index < destination_index

    def duplicate_stations(self) -> List[str]:
        seen = set()
        duplicates = []
        for station in self.stations:
            key = station.lower()
            if key in seen and station not in duplicates:
                duplicates.append(station)
            seen.add(key)
        return duplicates
