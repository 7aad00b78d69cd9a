"""Operations toolkit for the AUSD CDP stablecoin protocol."""

__version__ = "0.1.0"
