from typing import Any, Dict, List, Optional, Union

from flughafen.building.builder import Builder, SynthesizedFile
from flughafen.building.comments import FUNDING_HEADER, comment_lines
from flughafen.globals.errors import BuilderConfigurationError
from flughafen.globals.yaml_io import dump_yaml

FUNDING_PATH = ".github/FUNDING.yml"
MAX_LISTED = 4


class FundingBuilder(Builder[Dict[str, Any]]):
    """Builds ``.github/FUNDING.yml``.

    ``github`` and ``custom`` take up to four entries. :meth:`build` hands out
    the configuration and starts over with an empty one, so one builder can
    produce several files.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self.config: Dict[str, Any] = dict(initial or {})

    def github(self, sponsors: Union[str, List[str]]) -> "FundingBuilder":
        self.config["github"] = self._listed("github", sponsors, "GitHub sponsors cannot have more than 4 usernames")
        return self

    def patreon(self, username: str) -> "FundingBuilder":
        self.config["patreon"] = username
        return self

    def open_collective(self, username: str) -> "FundingBuilder":
        self.config["open_collective"] = username
        return self

    def ko_fi(self, username: str) -> "FundingBuilder":
        self.config["ko_fi"] = username
        return self

    def tidelift(self, platform_package: str) -> "FundingBuilder":
        self.config["tidelift"] = platform_package
        return self

    def community_bridge(self, project_name: str) -> "FundingBuilder":
        self.config["community_bridge"] = project_name
        return self

    def liberapay(self, username: str) -> "FundingBuilder":
        self.config["liberapay"] = username
        return self

    def issuehunt(self, username: str) -> "FundingBuilder":
        self.config["issuehunt"] = username
        return self

    def otechie(self, username: str) -> "FundingBuilder":
        self.config["otechie"] = username
        return self

    def lfx_crowdfunding(self, project_name: str) -> "FundingBuilder":
        self.config["lfx_crowdfunding"] = project_name
        return self

    def polar(self, username: str) -> "FundingBuilder":
        self.config["polar"] = username
        return self

    def buy_me_a_coffee(self, username: str) -> "FundingBuilder":
        self.config["buy_me_a_coffee"] = username
        return self

    def thanks_dev(self, username: str) -> "FundingBuilder":
        self.config["thanks_dev"] = username
        return self

    def custom(self, urls: Union[str, List[str]]) -> "FundingBuilder":
        self.config["custom"] = self._listed("custom", urls, "Custom URLs cannot have more than 4 entries")
        return self

    def build(self) -> Dict[str, Any]:
        config = dict(self.config)
        self.config = {}
        return config

    def to_yaml(self) -> str:
        return "\n".join(comment_lines(FUNDING_HEADER.rstrip("\n"))) + "\n" + dump_yaml(self.build())

    def get_path(self) -> str:
        return FUNDING_PATH

    def synth(self) -> SynthesizedFile:
        return SynthesizedFile(self.get_path(), self.to_yaml())

    @staticmethod
    def _listed(platform: str, value: Union[str, List[str]], message: str) -> Union[str, List[str]]:
        if isinstance(value, str):
            return value
        if len(value) > MAX_LISTED:
            raise BuilderConfigurationError("FundingBuilder", message, [f"List at most {MAX_LISTED} {platform} entries"])
        return list(value)
