"""
Enum definitions for the Personnel Registry Backend
"""

from enum import Enum

class Gender(str, Enum):
    MASCULINE = "Masculine"
    FEMININE = "Feminine"

# Cities offered by the registration form
class City(str, Enum):
    """
    Cities a person can be registered in.
    Only these values are accepted; anything else fails validation.
    """
    QUITO = "Quito"
    GUAYAQUIL = "Guayaquil"
    CUENCA = "Cuenca"
    AMBATO = "Ambato"
    MANTA = "Manta"
    LOJA = "Loja"
    RIOBAMBA = "Riobamba"
    MACHALA = "Machala"
    IBARRA = "Ibarra"
    LATACUNGA = "Latacunga"
