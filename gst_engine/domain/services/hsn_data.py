# gst_engine/domain/services/hsn_data.py
"""
Static HSN classification tables.

HSN structure: 2 digits chapter, 4 heading, 6 sub-heading, 8 tariff item.
The code list is a curated sample of commonly invoiced goods; codes not
listed resolve through their longest registered prefix.
"""

from __future__ import annotations

from decimal import Decimal

from gst_engine.domain.models.hsn import HSNChapter, HSNCode

_CHAPTERS: list[tuple[str, str, str]] = [
    # SECTION I: LIVE ANIMALS; ANIMAL PRODUCTS
    ("01", "Live Animals", "I"),
    ("02", "Meat and Edible Meat Offal", "I"),
    ("03", "Fish and Crustaceans, Molluscs and Other Aquatic Invertebrates", "I"),
    ("04", "Dairy Produce; Birds' Eggs; Natural Honey; Edible Products of Animal Origin", "I"),
    ("05", "Products of Animal Origin, Not Elsewhere Specified or Included", "I"),
    # SECTION II: VEGETABLE PRODUCTS
    ("06", "Live Trees and Other Plants; Bulbs, Roots; Cut Flowers", "II"),
    ("07", "Edible Vegetables and Certain Roots and Tubers", "II"),
    ("08", "Edible Fruit and Nuts; Peel of Citrus Fruit or Melons", "II"),
    ("09", "Coffee, Tea, Maté and Spices", "II"),
    ("10", "Cereals", "II"),
    ("11", "Products of the Milling Industry; Malt; Starches; Inulin; Wheat Gluten", "II"),
    ("12", "Oil Seeds and Oleaginous Fruits; Miscellaneous Grains, Seeds and Fruit", "II"),
    ("13", "Lac; Gums, Resins and Other Vegetable Saps and Extracts", "II"),
    ("14", "Vegetable Plaiting Materials; Vegetable Products Not Elsewhere Specified", "II"),
    # SECTION III: ANIMAL OR VEGETABLE FATS AND OILS
    ("15", "Animal or Vegetable Fats and Oils and their Cleavage Products", "III"),
    # SECTION IV: PREPARED FOODSTUFFS
    ("16", "Preparations of Meat, Fish or Crustaceans, Molluscs", "IV"),
    ("17", "Sugars and Sugar Confectionery", "IV"),
    ("18", "Cocoa and Cocoa Preparations", "IV"),
    ("19", "Preparations of Cereals, Flour, Starch or Milk; Pastrycooks' Products", "IV"),
    ("20", "Preparations of Vegetables, Fruit, Nuts or Other Parts of Plants", "IV"),
    ("21", "Miscellaneous Edible Preparations", "IV"),
    ("22", "Beverages, Spirits and Vinegar", "IV"),
    ("23", "Residues and Waste from the Food Industries; Prepared Animal Fodder", "IV"),
    ("24", "Tobacco and Manufactured Tobacco Substitutes", "IV"),
    # SECTION V: MINERAL PRODUCTS
    ("25", "Salt; Sulphur; Earths and Stone; Plastering Materials, Lime and Cement", "V"),
    ("26", "Ores, Slag and Ash", "V"),
    ("27", "Mineral Fuels, Mineral Oils and Products of their Distillation", "V"),
    # SECTION VI: PRODUCTS OF THE CHEMICAL OR ALLIED INDUSTRIES
    ("28", "Inorganic Chemicals; Organic or Inorganic Compounds of Precious Metals", "VI"),
    ("29", "Organic Chemicals", "VI"),
    ("30", "Pharmaceutical Products", "VI"),
    ("31", "Fertilisers", "VI"),
    ("32", "Tanning or Dyeing Extracts; Tannins and their Derivatives; Dyes, Pigments", "VI"),
    ("33", "Essential Oils and Resinoids; Perfumery, Cosmetic or Toilet Preparations", "VI"),
    ("34", "Soap, Organic Surface-active Agents, Washing Preparations, Lubricants", "VI"),
    ("35", "Albuminoidal Substances; Modified Starches; Glues; Enzymes", "VI"),
    ("36", "Explosives; Pyrotechnic Products; Matches; Pyrophoric Alloys", "VI"),
    ("37", "Photographic or Cinematographic Goods", "VI"),
    ("38", "Miscellaneous Chemical Products", "VI"),
    # SECTION VII: PLASTICS AND ARTICLES THEREOF; RUBBER AND ARTICLES THEREOF
    ("39", "Plastics and Articles Thereof", "VII"),
    ("40", "Rubber and Articles Thereof", "VII"),
    # SECTION VIII: RAW HIDES AND SKINS, LEATHER
    ("41", "Raw Hides and Skins (other than furskins) and Leather", "VIII"),
    ("42", "Articles of Leather; Saddlery and Harness; Travel Goods, Handbags", "VIII"),
    ("43", "Furskins and Artificial Fur; Manufactures Thereof", "VIII"),
    # SECTION IX: WOOD AND ARTICLES OF WOOD
    ("44", "Wood and Articles of Wood; Wood Charcoal", "IX"),
    ("45", "Cork and Articles of Cork", "IX"),
    ("46", "Manufactures of Straw, of Esparto or of Other Plaiting Materials", "IX"),
    # SECTION X: PULP OF WOOD OR OF OTHER FIBROUS CELLULOSIC MATERIAL
    ("47", "Pulp of Wood or of Other Fibrous Cellulosic Material; Recovered Paper", "X"),
    ("48", "Paper and Paperboard; Articles of Paper Pulp, Paper or Paperboard", "X"),
    ("49", "Printed Books, Newspapers, Pictures and Other Products of the Printing Industry", "X"),
    # SECTION XI: TEXTILES AND TEXTILE ARTICLES
    ("50", "Silk", "XI"),
    ("51", "Wool, Fine or Coarse Animal Hair; Horsehair Yarn and Woven Fabric", "XI"),
    ("52", "Cotton", "XI"),
    ("53", "Other Vegetable Textile Fibres; Paper Yarn and Woven Fabrics", "XI"),
    ("54", "Man-made Filaments; Strip and the Like of Man-made Textile Materials", "XI"),
    ("55", "Man-made Staple Fibres", "XI"),
    ("56", "Wadding, Felt and Nonwovens; Special Yarns; Twine, Cordage, Ropes", "XI"),
    ("57", "Carpets and Other Textile Floor Coverings", "XI"),
    ("58", "Special Woven Fabrics; Tufted Textile Fabrics; Lace; Tapestries", "XI"),
    ("59", "Impregnated, Coated, Covered or Laminated Textile Fabrics", "XI"),
    ("60", "Knitted or Crocheted Fabrics", "XI"),
    ("61", "Articles of Apparel and Clothing Accessories, Knitted or Crocheted", "XI"),
    ("62", "Articles of Apparel and Clothing Accessories, Not Knitted or Crocheted", "XI"),
    ("63", "Other Made-up Textile Articles; Sets; Worn Clothing", "XI"),
    # SECTION XII: FOOTWEAR, HEADGEAR
    ("64", "Footwear, Gaiters and the Like; Parts of Such Articles", "XII"),
    ("65", "Headgear and Parts Thereof", "XII"),
    ("66", "Umbrellas, Sun Umbrellas, Walking-sticks, Seat-sticks, Whips", "XII"),
    # SECTION XIII: ARTICLES OF STONE, PLASTER, CEMENT
    ("68", "Articles of Stone, Plaster, Cement, Asbestos, Mica or Similar Materials", "XIII"),
    ("69", "Ceramic Products", "XIII"),
    ("70", "Glass and Glassware", "XIII"),
    # SECTION XIV: NATURAL OR CULTURED PEARLS, PRECIOUS STONES
    ("71", "Natural or Cultured Pearls, Precious or Semi-precious Stones, Precious Metals", "XIV"),
    # SECTION XV: BASE METALS AND ARTICLES OF BASE METAL
    ("72", "Iron and Steel", "XV"),
    ("73", "Articles of Iron or Steel", "XV"),
    ("74", "Copper and Articles Thereof", "XV"),
    ("75", "Nickel and Articles Thereof", "XV"),
    ("76", "Aluminium and Articles Thereof", "XV"),
    ("78", "Lead and Articles Thereof", "XV"),
    ("79", "Zinc and Articles Thereof", "XV"),
    ("80", "Tin and Articles Thereof", "XV"),
    ("81", "Other Base Metals; Cermets; Articles Thereof", "XV"),
    ("82", "Tools, Implements, Cutlery, Spoons and Forks, of Base Metal", "XV"),
    ("83", "Miscellaneous Articles of Base Metal", "XV"),
    # SECTION XVI: MACHINERY AND MECHANICAL APPLIANCES; ELECTRICAL EQUIPMENT
    ("84", "Nuclear Reactors, Boilers, Machinery and Mechanical Appliances; Parts Thereof", "XVI"),
    ("85", "Electrical Machinery and Equipment and Parts Thereof", "XVI"),
    # SECTION XVII: VEHICLES, AIRCRAFT, VESSELS
    ("86", "Railway or Tramway Locomotives, Rolling-stock and Parts Thereof", "XVII"),
    ("87", "Vehicles Other than Railway or Tramway Rolling-stock, and Parts", "XVII"),
    ("88", "Aircraft, Spacecraft, and Parts Thereof", "XVII"),
    ("89", "Ships, Boats and Floating Structures", "XVII"),
    # SECTION XVIII: OPTICAL, PHOTOGRAPHIC, CINEMATOGRAPHIC, MEASURING
    ("90", "Optical, Photographic, Cinematographic, Measuring, Checking, Precision Instruments", "XVIII"),
    ("91", "Clocks and Watches and Parts Thereof", "XVIII"),
    ("92", "Musical Instruments; Parts and Accessories of Such Articles", "XVIII"),
    # SECTION XIX: ARMS AND AMMUNITION
    ("93", "Arms and Ammunition; Parts and Accessories Thereof", "XIX"),
    # SECTION XX: MISCELLANEOUS MANUFACTURED ARTICLES
    ("94", "Furniture; Bedding, Mattresses, Mattress Supports, Cushions", "XX"),
    ("95", "Toys, Games and Sports Requisites; Parts and Accessories Thereof", "XX"),
    ("96", "Miscellaneous Manufactured Articles", "XX"),
    # SECTION XXI: WORKS OF ART, COLLECTORS' PIECES AND ANTIQUES
    ("97", "Works of Art, Collectors' Pieces and Antiques", "XXI"),
    ("98", "Project Imports; Passengers' Baggage", "XXI"),
    ("99", "Miscellaneous Goods", "XXI"),
]

HSN_CHAPTERS: dict[str, HSNChapter] = {
    code: HSNChapter(code=code, description=description, section=section)
    for code, description, section in _CHAPTERS
}


def _code(code, description, rate, unit, cess=None, notes=None) -> HSNCode:
    return HSNCode(
        code=code,
        description=description,
        chapter=code[:2],
        gst_rate=Decimal(str(rate)) if rate is not None else None,
        cess=Decimal(str(cess)) if cess is not None else None,
        unit=unit,
        notes=notes,
    )


COMMON_HSN_CODES: list[HSNCode] = [
    # Food Items
    _code("0701", "Potatoes, fresh or chilled", 0, "KGM"),
    _code("0702", "Tomatoes, fresh or chilled", 0, "KGM"),
    _code("0703", "Onions, shallots, garlic, leeks", 0, "KGM"),
    _code("0801", "Coconuts, Brazil nuts and cashew nuts, fresh or dried", 5, "KGM"),
    _code("0901", "Coffee, whether or not roasted or decaffeinated", 5, "KGM"),
    _code("0902", "Tea, whether or not flavoured", 5, "KGM"),
    _code("1001", "Wheat and meslin", 0, "KGM"),
    _code("1006", "Rice", 0, "KGM"),
    # Dairy Products
    _code("0401", "Milk and cream, not concentrated nor sweetened", 0, "LTR"),
    _code("0402", "Milk and cream, concentrated or sweetened", 5, "KGM"),
    _code("0403", "Buttermilk, curdled milk, yogurt, kephir", 5, "KGM"),
    _code("0404", "Whey and other dairy products", 5, "KGM"),
    _code("0405", "Butter and other fats and oils derived from milk", 12, "KGM"),
    _code("0406", "Cheese and curd", 12, "KGM"),
    # Textiles
    _code("52", "Cotton and cotton products", 5, "MTR"),
    _code("5208", "Woven fabrics of cotton", 5, "MTR"),
    _code("61", "Knitted or crocheted apparel", 12, "PCS"),
    _code("62", "Non-knitted apparel", 12, "PCS"),
    # Footwear
    _code("6401", "Waterproof footwear with outer soles and uppers of rubber or plastics", 18, "PAR"),
    _code("6402", "Other footwear with outer soles and uppers of rubber or plastics", 18, "PAR"),
    _code("6403", "Footwear with outer soles of rubber, plastics, leather or composition leather", 18, "PAR"),
    _code("6404", "Footwear with outer soles of rubber or plastics and uppers of textile materials", 12, "PAR"),
    _code("6405", "Other footwear", 18, "PAR"),
    # Electronics & IT Products
    _code("8471", "Automatic data processing machines and units thereof", 18, "NOS"),
    _code("847130", "Portable automatic data processing machines, weighing not more than 10 kg (Laptops)", 18, "NOS"),
    _code("847141", "Automatic data processing machines comprising CPU, input & output unit (Desktop PCs)", 18, "NOS"),
    _code("847150", "Digital processing units other than those of sub-headings 8471.41 and 8471.49", 18, "NOS"),
    _code("847160", "Input or output units, whether or not containing storage units", 18, "NOS"),
    _code("847170", "Storage units", 18, "NOS"),
    _code("8473", "Parts and accessories for machines of heading 8471", 18, "NOS"),
    _code("8517", "Telephone sets, including telephones for cellular networks or for other wireless networks", 18, "NOS"),
    _code("851712", "Telephones for cellular networks or for other wireless networks (Mobile Phones)", 18, "NOS"),
    _code("851762", "Machines for reception, conversion and transmission or regeneration of voice, images", 18, "NOS"),
    _code("8518", "Microphones, loudspeakers, headphones and earphones", 18, "NOS"),
    _code("8528", "Monitors and projectors, not incorporating television reception apparatus", 18, "NOS"),
    # Printers and Office Equipment
    _code("8443", "Printing machinery used for printing by means of plates, cylinders and other printing components", 18, "NOS"),
    _code("844331", "Printers (laser, inkjet, etc.)", 18, "NOS"),
    _code("8470", "Calculating machines and pocket-size data recording", 18, "NOS"),
    _code("8472", "Other office machines (duplicating machines, addressing machines, etc.)", 18, "NOS"),
    # Plastics
    _code("39", "Plastics and articles thereof", 18, "KGM"),
    _code("3920", "Plastic sheets, film, foil and strip", 18, "KGM"),
    _code("3923", "Articles for the conveyance or packing of goods, of plastics", 18, "KGM"),
    _code("3926", "Other articles of plastics", 18, "KGM"),
    _code("392690", "Other articles of plastics (mobile covers, etc.)", 18, "NOS"),
    # Paper and Stationery
    _code("4801", "Newsprint, in rolls or sheets", 5, "KGM"),
    _code("4802", "Uncoated paper and paperboard", 12, "KGM"),
    _code("4820", "Exercise books, note books, diaries", 12, "NOS"),
    _code("482010", "Exercise books (notebooks)", 12, "NOS"),
    _code("4901", "Printed books, brochures, leaflets", 5, "NOS"),
    _code("490110", "Books (printed)", 5, "NOS"),
    # Furniture
    _code("9403", "Other furniture and parts thereof", 18, "NOS"),
    _code("940330", "Wooden furniture of a kind used in offices", 18, "NOS"),
    _code("940340", "Wooden furniture of a kind used in the kitchen", 18, "NOS"),
    _code("940350", "Wooden furniture of a kind used in the bedroom", 18, "NOS"),
    _code("940360", "Other wooden furniture", 18, "NOS"),
    # Automobiles
    _code("8702", "Motor vehicles for the transport of ten or more persons", 28, "NOS", cess=15, notes="Buses with cess"),
    _code("8703", "Motor cars and other motor vehicles principally designed for the transport of persons", 28, "NOS", cess=22, notes="Cars - cess varies by engine size"),
    _code("870321", "Vehicles with spark-ignition internal combustion reciprocating piston engine of a cylinder capacity not exceeding 1,000 cc", 28, "NOS", cess=1),
    _code("870322", "Vehicles with spark-ignition internal combustion reciprocating piston engine of a cylinder capacity exceeding 1,000 cc but not exceeding 1,500 cc", 28, "NOS", cess=15),
    _code("870323", "Vehicles with spark-ignition internal combustion reciprocating piston engine of a cylinder capacity exceeding 1,500 cc but not exceeding 3,000 cc", 28, "NOS", cess=17),
    _code("870324", "Vehicles with spark-ignition internal combustion reciprocating piston engine of a cylinder capacity exceeding 3,000 cc", 28, "NOS", cess=22),
    _code("8704", "Motor vehicles for the transport of goods", 28, "NOS"),
    _code("8711", "Motorcycles (including mopeds) and cycles fitted with an auxiliary motor", 28, "NOS"),
    _code("8712", "Bicycles and other cycles (including delivery tricycles), not motorised", 12, "NOS"),
    # Pharmaceuticals
    _code("30", "Pharmaceutical products", 12, "KGM"),
    _code("3003", "Medicaments consisting of two or more constituents mixed together", 12, "KGM"),
    _code("3004", "Medicaments consisting of mixed or unmixed products for therapeutic or prophylactic uses", 12, "KGM"),
    # Cosmetics and Toiletries
    _code("3303", "Perfumes and toilet waters", 28, "KGM"),
    _code("3304", "Beauty or make-up preparations and preparations for the care of the skin", 28, "KGM"),
    _code("3305", "Preparations for use on the hair", 28, "KGM"),
    _code("3306", "Preparations for oral or dental hygiene (toothpaste, etc.)", 18, "KGM"),
    _code("3401", "Soap; organic surface-active products and preparations for use as soap", 18, "KGM"),
    _code("340111", "Soap for toilet use (toilet soap)", 18, "KGM"),
    # Toys and Sports Goods
    _code("9503", "Tricycles, scooters, pedal cars and similar wheeled toys; dolls' carriages; dolls; other toys", 12, "NOS"),
    _code("9504", "Video game consoles and machines, articles for funfair, table or parlour games", 28, "NOS"),
    _code("9506", "Articles and equipment for general physical exercise, gymnastics, athletics", 18, "NOS"),
    # Jewelry
    _code("7113", "Articles of jewellery and parts thereof, of precious metal or of metal clad with precious metal", 3, "GRM"),
    _code("7114", "Articles of goldsmiths' or silversmiths' wares", 3, "GRM"),
    # Construction Materials
    _code("6907", "Ceramic flags and paving, hearth or wall tiles", 28, "MTK"),
    _code("6908", "Glazed ceramic flags and paving, hearth or wall tiles", 28, "MTK"),
    _code("7308", "Structures and parts of structures, of iron or steel", 18, "KGM"),
    _code("7326", "Other articles of iron or steel", 18, "KGM"),
]
