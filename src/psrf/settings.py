from pathlib import Path

import yaml


class Settings(object):
    """ Turns kwargs dictionary into a settings object """
    def _setup_attrs(self):
        self.family = None
        self.scaling = 1.5
        self.greek = False
        self.burnin = 0
        self.thin = 1
        self.threshold = 1.1
        self.output_rhat = 'rhat.csv'
        self.output_plot = 'rhat.png'

    def __init__(self, **kwargs):
        self._setup_attrs()
        assert kwargs.keys() <= self.__dict__.keys(), \
            "Unknown settings: %s" % ", ".join(sorted(kwargs.keys() - self.__dict__.keys()))
        self.__dict__.update(kwargs)

    @classmethod
    def from_yaml(cls, filename, **overrides):
        """ Settings from a YAML file; keyword arguments that are not None take precedence """
        with open(Path(filename), 'r', encoding="utf-8") as stream:
            kwargs = yaml.load(stream, Loader = yaml.Loader) or {}
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    def get_load_settings(self):
        """ Draw loading subset of settings """
        return {k: self.__dict__[k] for k in ('burnin', 'thin')}

    def get_plot_settings(self):
        """ Plotting subset of settings """
        return {k: self.__dict__[k] for k in ('scaling', 'greek')}
