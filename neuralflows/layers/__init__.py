"""Network layers: the layer interfaces and the input, dense, activation, pooling, normalisation, flattening and output layers."""