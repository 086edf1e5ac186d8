# gst_engine/domain/models/gstr1.py
"""GSTR-1 offline-utility JSON structure. Field names follow the portal schema."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from gst_engine.domain.models.gst import ZERO, Amount


class Gstr1ItemDetail(BaseModel):
    rt: Amount  # tax rate
    txval: Amount  # taxable value
    iamt: Optional[Amount] = None  # IGST
    camt: Optional[Amount] = None  # CGST
    samt: Optional[Amount] = None  # SGST
    csamt: Amount = ZERO  # cess


class Gstr1Item(BaseModel):
    num: int  # line serial number
    itm_det: Gstr1ItemDetail


class Gstr1B2BInv(BaseModel):
    inum: str
    idt: str  # DD-MM-YYYY
    val: Amount
    pos: str
    rchrg: Literal["Y", "N"] = "N"
    inv_typ: str = "R"
    etin: Optional[str] = None
    itms: list[Gstr1Item] = Field(default_factory=list)


class Gstr1B2BEntry(BaseModel):
    ctin: str  # recipient GSTIN
    inv: list[Gstr1B2BInv] = Field(default_factory=list)


class Gstr1B2CLInv(BaseModel):
    inum: str
    idt: str
    val: Amount
    etin: Optional[str] = None
    itms: list[Gstr1Item] = Field(default_factory=list)


class Gstr1B2CLEntry(BaseModel):
    pos: str
    inv: list[Gstr1B2CLInv] = Field(default_factory=list)


class Gstr1B2CSEntry(BaseModel):
    sply_ty: Literal["INTER", "INTRA"]
    pos: str
    typ: Literal["OE", "E"] = "OE"
    rt: Amount
    txval: Amount = ZERO
    iamt: Amount = ZERO
    camt: Amount = ZERO
    samt: Amount = ZERO
    csamt: Amount = ZERO


class Gstr1ExpInv(BaseModel):
    inum: str
    idt: str
    val: Amount
    sbpcode: str
    sbnum: str
    sbdt: str
    itms: list[Gstr1Item] = Field(default_factory=list)


class Gstr1ExpEntry(BaseModel):
    exp_typ: Literal["WPAY", "WOPAY"]
    inv: list[Gstr1ExpInv] = Field(default_factory=list)


class Gstr1Note(BaseModel):
    ntty: Literal["C", "D"]
    nt_num: str
    nt_dt: str
    val: Amount
    p_gst: Optional[Literal["Y", "N"]] = None
    rsn: Optional[str] = None
    inum: Optional[str] = None  # original invoice
    idt: Optional[str] = None
    pos: Optional[str] = None
    itms: list[Gstr1Item] = Field(default_factory=list)


class Gstr1CDNREntry(BaseModel):
    ctin: str
    nt: list[Gstr1Note] = Field(default_factory=list)


class Gstr1CDNUREntry(BaseModel):
    typ: Literal["B2CL", "EXPWP", "EXPWOP"]
    pos: Optional[str] = None
    nt: list[Gstr1Note] = Field(default_factory=list)


class Gstr1NilSupply(BaseModel):
    sply_ty: Literal["INTRB2B", "INTRB2C", "INTERB2B", "INTERB2C"]
    nil_amt: Amount = ZERO
    expt_amt: Amount = ZERO
    ngsup_amt: Amount = ZERO


class Gstr1Nil(BaseModel):
    inv: list[Gstr1NilSupply] = Field(default_factory=list)


class Gstr1HSNEntry(BaseModel):
    num: int
    hsn_sc: str
    desc: str
    uqc: str  # unit quantity code
    qty: Amount = ZERO
    val: Amount = ZERO
    txval: Amount = ZERO
    iamt: Amount = ZERO
    camt: Amount = ZERO
    samt: Amount = ZERO
    csamt: Amount = ZERO


class Gstr1Return(BaseModel):
    gstin: str
    ret_period: str  # MMYYYY
    b2b: list[Gstr1B2BEntry] = Field(default_factory=list)
    b2cl: list[Gstr1B2CLEntry] = Field(default_factory=list)
    b2cs: list[Gstr1B2CSEntry] = Field(default_factory=list)
    exp: list[Gstr1ExpEntry] = Field(default_factory=list)
    cdnr: list[Gstr1CDNREntry] = Field(default_factory=list)
    cdnur: list[Gstr1CDNUREntry] = Field(default_factory=list)
    nil: Gstr1Nil = Field(default_factory=Gstr1Nil)
    hsn: list[Gstr1HSNEntry] = Field(default_factory=list)
