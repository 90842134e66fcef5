from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Perfil de acesso. Only ENCARREGADO may write."""

    ENCARREGADO = "ENCARREGADO"
    FUNCIONARIO = "FUNCIONARIO"


class Category(str, Enum):
    GRADUADO = "GRADUADO"
    CABO_SOLDADO = "CABO_SOLDADO"


class Rank(str, Enum):
    """Graduação, declared from most to least senior."""

    SUBOFICIAL = "SO"
    PRIMEIRO_SARGENTO = "1S"
    SEGUNDO_SARGENTO = "2S"
    TERCEIRO_SARGENTO = "3S"
    CABO = "CB"
    SOLDADO_PRIMEIRA = "S1"
    SOLDADO_SEGUNDA = "S2"

    @property
    def order(self) -> int:
        return list(Rank).index(self)

    @property
    def category(self) -> Category:
        return RANK_CATEGORY[self]


RANK_CATEGORY = {
    Rank.SUBOFICIAL: Category.GRADUADO,
    Rank.PRIMEIRO_SARGENTO: Category.GRADUADO,
    Rank.SEGUNDO_SARGENTO: Category.GRADUADO,
    Rank.TERCEIRO_SARGENTO: Category.GRADUADO,
    Rank.CABO: Category.CABO_SOLDADO,
    Rank.SOLDADO_PRIMEIRA: Category.CABO_SOLDADO,
    Rank.SOLDADO_SEGUNDA: Category.CABO_SOLDADO,
}


class Shift(str, Enum):
    """Turno. INTEGRAL covers both half shifts."""

    MATUTINO = "MATUTINO"
    VESPERTINO = "VESPERTINO"
    INTEGRAL = "INTEGRAL"


class AbsenceReason(str, Enum):
    """Motivos de ausência (lista fechada)."""

    MISSAO = "Missão"
    COMISSAO = "Comissão"
    SERVICO = "Serviço"
    FERIAS = "Férias"
    DISPENSA_MEDICA = "Dispensa Médica"
    DISPENSADO_PELA_CHEFIA = "Dispensado pela chefia"
    LICENCA_PATERNIDADE = "Licença Paternidade"
    LICENCA_MATERNIDADE = "Licença Maternidade"
    LICENCA_LUTO = "Licença Luto"
    DISPENSA_DE_SERVICO = "Dispensa de serviço"
    TRANSITO = "Trânsito"
    INSTALACAO = "Instalação"
    LICENCA_NUPCIAS = "Licença Núpcias"
    OUTRO = "Outro"


class ConflictKind(str, Enum):
    """Blocking error kinds returned by the absence validator."""

    INVALID_RANGE = "INVALID_RANGE"
    UNKNOWN_PERSON = "UNKNOWN_PERSON"
    OVERLAPPING_ABSENCE = "OVERLAPPING_ABSENCE"
