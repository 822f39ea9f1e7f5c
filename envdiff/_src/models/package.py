from pydantic import BaseModel, ConfigDict

from envdiff._src.exceptions import RecordParseError


class PackageRecord(BaseModel):
    """A package installed in a conda environment, as reported by
    `conda list`, tagged with the environment it was observed in.

    Two records are the same package when name, version, build and
    channel match. ``env_name`` takes no part in equality or hashing,
    so sets of records from different environments can be subtracted
    from each other.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    build: str
    # empty when the listing has no channel column (local/unspecified)
    channel: str = ""
    env_name: str

    @classmethod
    def parse(cls, line: str, env_name: str) -> "PackageRecord":
        """Parse one line of `conda list` output.

        Parameters
        ----------
        line: str
            A single listing line, eg. ``numpy  1.26.4  py311h64a7726_0  conda-forge``
        env_name: str
            The environment the line was listed from

        Returns
        -------
        record: PackageRecord

        Raises
        ------
        RecordParseError
            If the line does not hold exactly 3 or 4 fields
        """
        tokens = [token for token in line.split(" ") if token != ""]
        if len(tokens) == 3:
            name, version, build = tokens
            return cls(name=name, version=version, build=build, channel="", env_name=env_name)
        if len(tokens) == 4:
            name, version, build, channel = tokens
            return cls(name=name, version=version, build=build, channel=channel, env_name=env_name)
        raise RecordParseError(line, len(tokens))

    def identity(self) -> tuple[str, str, str, str]:
        return (self.name, self.version, self.build, self.channel)

    def __eq__(self, other):
        if isinstance(other, PackageRecord):
            return self.identity() == other.identity()
        return NotImplemented

    def __hash__(self):
        return hash(self.identity())

    def __lt__(self, other):
        if isinstance(other, PackageRecord):
            return self.name < other.name
        return NotImplemented

    def __str__(self):
        return (
            f"(name {self.name}, version {self.version},build {self.build}, "
            f"channel {self.channel},env_name {self.env_name})"
        )
