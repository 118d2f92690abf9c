"""Stopword and suffix lists used by the text normalizer."""

from typing import Dict, FrozenSet, Tuple


PORTUGUESE_STOPWORDS: FrozenSet[str] = frozenset({
    "a", "ao", "aos", "aquela", "aquelas", "aquele", "aqueles", "aquilo",
    "as", "até", "com", "como", "da", "das", "de", "dela", "delas", "dele",
    "deles", "depois", "do", "dos", "e", "ela", "elas", "ele", "eles", "em",
    "entre", "era", "eram", "éramos", "essa", "essas", "esse", "esses",
    "esta", "estas", "este", "estes", "eu", "foi", "fomos", "for", "foram",
    "fosse", "fossem", "há", "isso", "isto", "já", "lhe", "lhes", "mais",
    "mas", "me", "mesmo", "meu", "meus", "minha", "minhas", "muito",
    "muitos", "na", "não", "nas", "nem", "no", "nos", "nós", "nossa",
    "nossas", "nosso", "nossos", "num", "numa", "o", "os", "ou", "para",
    "pela", "pelas", "pelo", "pelos", "por", "qual", "quando", "que",
    "quem", "são", "se", "seja", "sejam", "sem", "seu", "seus", "só",
    "somos", "sua", "suas", "também", "te", "tem", "tém", "temos", "tenho",
    "teu", "teus", "tu", "tua", "tuas", "um", "uma", "você", "vocês", "vos",
    "vosso", "vossos",
})

PORTUGUESE_SUFFIXES: Tuple[str, ...] = (
    "inho", "inha", "inhos", "inhas", "zinho", "zinha", "zinhos", "zinhas",
    "mente", "mento", "mentos", "acao", "acoes", "ação", "ações", "dade",
    "dades", "idade", "idades", "ismo", "ismos", "ista", "istas", "avel",
    "aveis", "ível", "íveis", "oso", "osa", "osos", "osas", "ador", "adora",
    "adores", "adoras", "ante", "antes", "ancia", "ância", "ancias",
    "âncias", "encia", "ência", "encias", "ências", "eza", "ezas", "ico",
    "ica", "icos", "icas", "aria", "arias", "ar", "er", "ir", "ando", "endo",
    "indo", "ado", "ada", "ados", "adas", "ido", "ida", "idos", "idas",
)

ENGLISH_STOPWORDS: FrozenSet[str] = frozenset({
    "the", "is", "at", "which", "on", "and", "a", "an", "as", "are",
    "was", "were", "be", "have", "has", "had", "do", "does", "did",
    "will", "would", "should", "could", "may", "might", "can", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we",
    "they", "what", "who", "when", "where", "why", "how", "all", "each",
    "every", "some", "any", "many", "much", "few", "more", "most", "other",
    "another", "such", "no", "not", "only", "own", "same", "so", "than",
    "too", "very", "just", "but", "or", "if", "then", "else", "because",
    "while", "of", "for", "with", "about", "against", "between", "into",
    "through", "during", "before", "after", "above", "below", "to", "from",
    "up", "down", "in", "out", "off", "over", "under", "again", "further",
    "there", "here", "my", "by",
})

ENGLISH_SUFFIXES: Tuple[str, ...] = (
    "ational", "fulness", "iveness", "ization", "ements", "ement", "ness",
    "ment", "less", "able", "ible", "ings", "ing", "ies", "ied", "ers",
    "est", "ful", "ous", "ly", "ed", "er", "es", "s",
)

STOPWORDS: Dict[str, FrozenSet[str]] = {
    "pt": PORTUGUESE_STOPWORDS,
    "en": ENGLISH_STOPWORDS,
}

SUFFIXES: Dict[str, Tuple[str, ...]] = {
    "pt": PORTUGUESE_SUFFIXES,
    "en": ENGLISH_SUFFIXES,
}
