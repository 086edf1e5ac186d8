# gst_engine/domain/models/gstr3b.py
"""GSTR-3B JSON structure (tables 3.1, 3.2, 4 and 5)."""

from typing import Literal

from pydantic import BaseModel, Field

from gst_engine.domain.models.gst import ZERO, Amount, InterStateSupply


class Gstr3bTaxRow(BaseModel):
    txval: Amount = ZERO
    iamt: Amount = ZERO
    camt: Amount = ZERO
    samt: Amount = ZERO
    csamt: Amount = ZERO


class Gstr3bZeroRated(BaseModel):
    txval: Amount = ZERO
    iamt: Amount = ZERO
    csamt: Amount = ZERO


class Gstr3bValueOnly(BaseModel):
    txval: Amount = ZERO


class Gstr3bSupDetails(BaseModel):
    osup_det: Gstr3bTaxRow = Field(default_factory=Gstr3bTaxRow)
    osup_zero: Gstr3bZeroRated = Field(default_factory=Gstr3bZeroRated)
    osup_nil_exmp: Gstr3bValueOnly = Field(default_factory=Gstr3bValueOnly)
    isup_rev: Gstr3bTaxRow = Field(default_factory=Gstr3bTaxRow)
    osup_nongst: Gstr3bValueOnly = Field(default_factory=Gstr3bValueOnly)


class Gstr3bInterSup(BaseModel):
    unreg_details: list[InterStateSupply] = Field(default_factory=list)
    comp_details: list[InterStateSupply] = Field(default_factory=list)
    uin_details: list[InterStateSupply] = Field(default_factory=list)


class Gstr3bItcAmounts(BaseModel):
    iamt: Amount = ZERO
    camt: Amount = ZERO
    samt: Amount = ZERO
    csamt: Amount = ZERO


class Gstr3bItcRow(Gstr3bItcAmounts):
    ty: Literal["IMPG", "IMPS", "ISRC", "ISD", "OTH", "RUL"]


class Gstr3bItcElg(BaseModel):
    itc_avl: list[Gstr3bItcRow] = Field(default_factory=list)
    itc_rev: list[Gstr3bItcRow] = Field(default_factory=list)
    itc_net: Gstr3bItcAmounts = Field(default_factory=Gstr3bItcAmounts)
    itc_inelg: list[Gstr3bItcRow] = Field(default_factory=list)


class Gstr3bInwardRow(BaseModel):
    ty: Literal["GST", "NONGST"]
    inter: Amount = ZERO
    intra: Amount = ZERO


class Gstr3bInwardSup(BaseModel):
    isup_details: list[Gstr3bInwardRow] = Field(default_factory=list)


class Gstr3bReturn(BaseModel):
    gstin: str
    ret_period: str  # MMYYYY
    sup_details: Gstr3bSupDetails = Field(default_factory=Gstr3bSupDetails)
    inter_sup: Gstr3bInterSup = Field(default_factory=Gstr3bInterSup)
    itc_elg: Gstr3bItcElg = Field(default_factory=Gstr3bItcElg)
    inward_sup: Gstr3bInwardSup = Field(default_factory=Gstr3bInwardSup)
