"""Demo confectionery catalog used by the CLI and the test suite."""

import copy
import json
from pathlib import Path
from typing import List, Union

from .models import Record


SAMPLE_PRODUCTS: List[Record] = [
    {
        "id": "bolo001",
        "nome": "Bolo de Chocolate com Morango",
        "descricao": "Delicioso bolo de chocolate com cobertura de morango fresco",
        "categoria": "bolos",
        "tags": ["chocolate", "morango", "festa", "aniversário"],
        "ingredientes": ["chocolate", "farinha", "açúcar", "morango", "leite"],
        "sabor": "chocolate",
        "ocasiao": "aniversário",
        "preco": 89.9,
        "disponivel": True,
        "tempoProducao": 48,  # hours
    },
    {
        "id": "bolo002",
        "nome": "Bolo Red Velvet",
        "descricao": "Tradicional bolo vermelho com cobertura de cream cheese",
        "categoria": "bolos",
        "tags": ["red velvet", "cream cheese", "festa", "casamento"],
        "ingredientes": ["farinha", "açúcar", "corante", "cream cheese", "manteiga"],
        "sabor": "red velvet",
        "ocasiao": "casamento",
        "preco": 110.0,
        "disponivel": True,
        "tempoProducao": 72,
    },
    {
        "id": "doce001",
        "nome": "Brigadeiro Gourmet",
        "descricao": "Brigadeiro artesanal feito com chocolate belga",
        "categoria": "doces",
        "tags": ["brigadeiro", "chocolate", "festa"],
        "ingredientes": ["chocolate belga", "leite condensado", "manteiga"],
        "sabor": "chocolate",
        "ocasiao": "festa",
        "preco": 3.5,
        "disponivel": True,
        "tempoProducao": 24,
    },
    {
        "id": "doce002",
        "nome": "Macaron de Framboesa",
        "descricao": "Delicado macaron francês com recheio de framboesa",
        "categoria": "doces",
        "tags": ["macaron", "framboesa", "gourmet"],
        "ingredientes": ["farinha de amêndoas", "açúcar", "claras", "framboesa"],
        "sabor": "framboesa",
        "ocasiao": "presente",
        "preco": 8.9,
        "disponivel": True,
        "tempoProducao": 48,
    },
    {
        "id": "torta001",
        "nome": "Torta de Limão",
        "descricao": "Clássica torta de limão com base crocante e cobertura de merengue",
        "categoria": "tortas",
        "tags": ["limão", "merengue", "sobremesa"],
        "ingredientes": ["limão", "leite condensado", "biscoito", "manteiga", "claras"],
        "sabor": "limão",
        "ocasiao": "almoço",
        "preco": 65.0,
        "disponivel": True,
        "tempoProducao": 24,
    },
]


def sample_products() -> List[Record]:
    """Fresh copy of the demo products, safe to mutate."""
    return copy.deepcopy(SAMPLE_PRODUCTS)


def write_sample_catalog(path: Union[str, Path]) -> Path:
    """Write the demo products as a JSON array and return the path."""
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(SAMPLE_PRODUCTS, f, indent=2, ensure_ascii=False)
    return output
